from src.hack_vm.utils import u16, sign_extend, is_unsigned_nbit, to_bin16, split_bits

def test_split_bits():
    x = 0b1110_1100_0001_0000
    # a=[12], c=[11:6], dest=[5:3], jump=[2:0]
    assert split_bits(x, ((12, 12), (11, 6), (5, 3), (2, 0))) == (0, 0b110000, 0b010, 0)

def test_u16_and_formats():
    assert u16(-1) == 0xFFFF
    assert u16(0x1_0005) == 5
    assert to_bin16(2) == "0" * 14 + "10"
    assert to_bin16(-1) == "1" * 16

def test_sign_extend():
    assert sign_extend(0xFFFF) == -1
    assert sign_extend(0x7FFF) == 32767
    assert sign_extend(0x8000) == -32768
    assert sign_extend(0x80, 8) == -128

def test_nbit_checks():
    assert is_unsigned_nbit(32767, 15)
    assert not is_unsigned_nbit(32768, 15)
    assert not is_unsigned_nbit(-1, 15)
