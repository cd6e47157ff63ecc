import pytest
from src.hack_vm.lexer import (
    strip_comment, normalize_line, iter_lines, split_words,
    is_symbol, split_label_decl, split_c_instruction,
)

# --- normalize_line ---
@pytest.mark.parametrize("src, expected", [
    ("push constant 7 // cmt", "push constant 7"),
    ("   add   ", "add"),
    ("// full comment", None),
    ("   // indented comment", None),
    ("", None),
    ("   \t ", None),
    ("label LOOP//pegado", "label LOOP"),
])
def test_normalize_line(src, expected):
    assert normalize_line(src) == expected

def test_strip_comment_keeps_empty_string():
    assert strip_comment("// x") == ""

def test_iter_lines_keeps_source_line_numbers():
    text = "// header\n\npush constant 1\n  // x\nadd\n"
    assert list(iter_lines(text)) == [(3, "push constant 1"), (5, "add")]

def test_split_words():
    assert split_words("push  local\t2") == ["push", "local", "2"]

# --- símbolos de ensamblador ---
@pytest.mark.parametrize("tok, ok", [
    ("LOOP", True),
    ("Foo.0", True),
    ("Main.fib$ret", True),
    ("_x:y", True),
    ("1abc", False),
    ("a-b", False),
    ("", False),
])
def test_is_symbol(tok, ok):
    assert is_symbol(tok) == ok

@pytest.mark.parametrize("src, name", [
    ("(LOOP)", "LOOP"),
    ("(TRUE.3)", "TRUE.3"),
    ("(LOOP", None),
    ("LOOP)", None),
])
def test_split_label_decl(src, name):
    assert split_label_decl(src) == name

@pytest.mark.parametrize("src, fields", [
    ("D=M", ("D", "M", "")),
    ("0;JMP", ("", "0", "JMP")),
    ("AM=M-1", ("AM", "M-1", "")),
    ("D = D + A ; JGT", ("D", "D+A", "JGT")),
    ("M", ("", "M", "")),
])
def test_split_c_instruction(src, fields):
    assert split_c_instruction(src) == fields
