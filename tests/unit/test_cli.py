from src.hack_vm import translator, assembler
from src.hack_vm.cpu import HackCPU

VM = """\
// Foo.vm
push constant 3
push constant 4
add
pop static 0
"""

def test_translate_then_assemble_files(tmp_path, capsys):
    src = tmp_path / "Foo.vm"
    src.write_text(VM, encoding="utf-8")
    assert translator.main([str(src)]) == 0
    asm = tmp_path / "Foo.asm"
    assert asm.exists()
    text = asm.read_text(encoding="utf-8")
    assert "@Foo.0" in text
    assert "OK: 4 instrucciones VM" in capsys.readouterr().out

    assert assembler.main([str(asm)]) == 0
    hack = tmp_path / "Foo.hack"
    lines = hack.read_text(encoding="utf-8").splitlines()
    assert all(len(l) == 16 and set(l) <= {"0", "1"} for l in lines)

    cpu = HackCPU.from_lines(lines)
    cpu.poke(0, 256)
    cpu.run()
    assert cpu.peek(16) == 7

def test_explicit_output_and_annotate(tmp_path):
    src = tmp_path / "Bar.vm"
    src.write_text("push constant 1\n", encoding="utf-8")
    out = tmp_path / "out" / "x.asm"
    out.parent.mkdir()
    assert translator.main([str(src), "-o", str(out), "--annotate"]) == 0
    assert out.read_text(encoding="utf-8").startswith("// push constant 1\n@1\n")

def test_bad_extension(tmp_path, capsys):
    src = tmp_path / "Foo.txt"
    src.write_text("add\n", encoding="utf-8")
    assert translator.main([str(src)]) == 2
    assert "extensión .vm" in capsys.readouterr().err
    assert assembler.main([str(src)]) == 2

def test_missing_file(tmp_path):
    assert translator.main([str(tmp_path / "Nope.vm")]) == 2

def test_errors_abort_without_output(tmp_path, capsys):
    src = tmp_path / "Bad.vm"
    src.write_text("push constant 1\npop constant 0\nadd\n", encoding="utf-8")
    assert translator.main([str(src)]) == 1
    assert not (tmp_path / "Bad.asm").exists()
    err = capsys.readouterr().err
    assert "Bad.vm:2: ERROR: pop constant" in err

def test_duplicate_label_aborts_without_output(tmp_path):
    src = tmp_path / "Dup.vm"
    src.write_text("label X\nlabel X\n", encoding="utf-8")
    assert translator.main([str(src)]) == 1
    assert not (tmp_path / "Dup.asm").exists()

def test_assembler_unresolved_jump(tmp_path, capsys):
    src = tmp_path / "Jmp.asm"
    src.write_text("@MISSING\n0;JMP\n", encoding="utf-8")
    assert assembler.main([str(src)]) == 1
    assert not (tmp_path / "Jmp.hack").exists()
    assert "Etiqueta no definida: MISSING" in capsys.readouterr().err

def test_assembler_variable_base_flag(tmp_path):
    src = tmp_path / "V.asm"
    src.write_text("@v\n", encoding="utf-8")
    assert assembler.main([str(src), "--variable-base", "1024"]) == 0
    assert (tmp_path / "V.hack").read_text(encoding="utf-8") == "0000010000000000\n"

def test_stem_unusable_as_namespace(tmp_path, capsys):
    src = tmp_path / "2nd.vm"
    src.write_text("push constant 5\npop static 0\n", encoding="utf-8")
    assert translator.main([str(src)]) == 2
    assert not (tmp_path / "2nd.asm").exists()
    assert "Espacio de nombres inválido: '2nd'" in capsys.readouterr().err

def test_translate_text_rejects_bad_namespace():
    _, diags, res = translator.translate_text("push constant 5\npop static 0\n", filename="my prog.vm")
    assert len(diags) == 1 and diags[0].kind == "operando_invalido"
    assert res.lines == []
