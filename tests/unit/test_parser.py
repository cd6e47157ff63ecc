import pytest
from src.hack_vm.parser import parse
from src.hack_vm.ast import (
    Direction, Segment, OpKind, BranchKind, SubKind,
    StackMove, Operator, Branch, Subroutine,
)

SRC = """
// Programa mínimo
push constant 7     // inmediato
push local 2
add
pop static 0
label LOOP
if-goto LOOP
goto END
function Main.f 2
call Main.f 1
return
"""

def test_parse_program_min():
    ins, diags = parse(SRC, filename="Main.vm")
    assert not diags
    assert [type(i).__name__ for i in ins] == [
        "StackMove", "StackMove", "Operator", "StackMove",
        "Branch", "Branch", "Branch", "Subroutine", "Subroutine", "Subroutine",
    ]
    assert ins[0] == StackMove(Direction.PUSH, Segment.CONSTANT, 7, line=3)
    assert ins[1].segment is Segment.LOCAL and ins[1].index == 2
    assert ins[2] == Operator(OpKind.ADD, line=5)
    assert ins[3].direction is Direction.POP and ins[3].segment is Segment.STATIC
    assert ins[5] == Branch(BranchKind.IF_GOTO, "LOOP", line=8)
    assert ins[7] == Subroutine(SubKind.FUNCTION, "Main.f", 2, line=10)
    assert ins[8].kind is SubKind.CALL and ins[8].count == 1
    assert ins[9] == Subroutine(SubKind.RETURN, line=12)

@pytest.mark.parametrize("op", [o.value for o in OpKind])
def test_every_operator(op):
    ins, diags = parse(op)
    assert not diags
    assert ins[0].kind is OpKind(op)

@pytest.mark.parametrize("seg", [s.value for s in Segment])
def test_every_segment_push(seg):
    ins, diags = parse(f"push {seg} 1")
    assert not diags
    assert ins[0].segment is Segment(seg)

def test_arity_by_kind():
    assert OpKind.NEG.arity == 1 and OpKind.NOT.arity == 1
    assert OpKind.SUB.arity == 2 and OpKind.EQ.arity == 2
    assert OpKind.LT.is_comparison and not OpKind.AND.is_comparison

@pytest.mark.parametrize("src, kind, fragment", [
    ("push constant", "linea_malformada", "espera segmento"),
    ("push heap 1", "linea_malformada", "Segmento desconocido"),
    ("mul", "linea_malformada", "Operación desconocida"),
    ("add 1", "linea_malformada", "no lleva operandos"),
    ("goto", "linea_malformada", "espera un nombre"),
    ("call Foo.bar", "linea_malformada", "nArgs"),
    ("function Foo.bar", "linea_malformada", "nLocals"),
    ("return 0", "linea_malformada", "no lleva operandos"),
    ("push local -1", "operando_invalido", "no numérico"),
    ("push local x", "operando_invalido", "no numérico"),
    ("push pointer 2", "operando_invalido", "pointer"),
    ("pop constant 0", "operando_invalido", "pop constant"),
    ("push temp 8", "operando_invalido", "temp"),
    ("push constant 32768", "operando_invalido", "fuera de rango"),
    ("label 9lives", "operando_invalido", "Símbolo inválido"),
    ("call Foo.bar -2", "operando_invalido", "no numérico"),
    ("push local +5", "operando_invalido", "no numérico"),
    ("pop argument -0", "operando_invalido", "no numérico"),
    ("push local 32768", "operando_invalido", "Índice fuera de rango"),
    ("pop static 40000", "operando_invalido", "Índice fuera de rango"),
    ("label END.0", "operando_invalido", "Nombre reservado"),
    ("goto TRUE.3", "operando_invalido", "Nombre reservado"),
    ("function RETURN.12 0", "operando_invalido", "Nombre reservado"),
    ("label Main.0", "operando_invalido", "Nombre reservado"),
])
def test_errors(src, kind, fragment):
    ins, diags = parse(src, filename="Bad.vm")
    assert ins == []
    assert len(diags) == 1
    d = diags[0]
    assert d.severity == "error" and d.kind == kind
    assert fragment in d.message
    assert d.line == 1 and d.file == "Bad.vm"

def test_stops_at_first_error():
    src = "push constant 1\nfoo\npush heap 3\nadd\n"
    ins, diags = parse(src)
    assert ins == []
    assert len(diags) == 1
    assert diags[0].line == 2

def test_pointer_bounds_accept_0_and_1():
    ins, diags = parse("pop pointer 0\npop pointer 1\npush temp 7")
    assert not diags and len(ins) == 3

def test_largest_index_accepted():
    ins, diags = parse("push local 32767\npop that 32767\npush constant 32767")
    assert not diags and len(ins) == 3

@pytest.mark.parametrize("name", ["Main.f", "Main.f.1x", "LOOP.END", "a$1", "Sys.init"])
def test_dotted_names_not_ending_in_digits_are_allowed(name):
    ins, diags = parse(f"label {name}\ngoto {name}")
    assert not diags
    assert ins[0].name == name
