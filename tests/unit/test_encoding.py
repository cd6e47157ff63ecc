import pytest
from src.hack_vm.assembler import assemble_text
from src.hack_vm.writers import to_bin_lines

def _bin(src: str):
    nodes, diags, lnk, enc = assemble_text(src, filename="<mem>")
    assert not diags
    return to_bin_lines(enc.words)

@pytest.mark.parametrize("src, word", [
    ("@2", "0000000000000010"),
    ("@32767", "0111111111111111"),
    ("D=A", "1110110000010000"),
    ("D=D+A", "1110000010010000"),
    ("M=D", "1110001100001000"),
    ("0;JMP", "1110101010000111"),
    ("D;JGT", "1110001100000001"),
    ("AM=M-1", "1111110010101000"),
    ("MD=M+1", "1111110111011000"),
    ("DM=M+1", "1111110111011000"),
    ("AMD=D|M;JLE", "1111010101111110"),
    ("M=-1", "1110111010001000"),
    ("D=M+D", "1111000010010000"),
])
def test_known_words(src, word):
    assert _bin(src) == [word]

def test_labels_do_not_take_rom_and_symbols_resolve():
    src = "@R0\nD=M\n(LOOP)\n@LOOP\n0;JMP\n@v\n"
    assert _bin(src) == [
        "0000000000000000",
        "1111110000010000",
        "0000000000000010",
        "1110101010000111",
        "0000000000010000",
    ]

def test_e2e_add_program():
    src = """
    // Computes R0 = 2 + 3
    @2
    D=A
    @3
    D=D+A
    @0
    M=D
    """
    nodes, diags, lnk, enc = assemble_text(src, filename="Add.asm")
    assert not diags
    assert [w.index for w in enc.words] == list(range(6))
    assert to_bin_lines(enc.words)[-1] == "1110001100001000"
