import pytest

from authrules.codec import BorshReader, BorshWriter
from authrules.errors import RuleSetError, RuleSetException


def test_u32_wire_format_is_little_endian():
    writer = BorshWriter()
    writer.write_u32(1)
    assert writer.getvalue() == b"\x01\x00\x00\x00"


def test_string_is_length_prefixed():
    writer = BorshWriter()
    writer.write_string("abc")
    assert writer.getvalue() == b"\x03\x00\x00\x00abc"


@pytest.mark.parametrize("value", [0, 1, 255])
def test_u8_round_trip(value):
    writer = BorshWriter()
    writer.write_u8(value)
    reader = BorshReader(writer.getvalue())
    assert reader.read_u8() == value
    reader.finish()


@pytest.mark.parametrize("value", [0, 7, 2**32 - 1])
def test_u32_round_trip(value):
    writer = BorshWriter()
    writer.write_u32(value)
    reader = BorshReader(writer.getvalue())
    assert reader.read_u32() == value


@pytest.mark.parametrize("value", [0, 5, 2**64 - 1])
def test_u64_round_trip(value):
    writer = BorshWriter()
    writer.write_u64(value)
    reader = BorshReader(writer.getvalue())
    assert reader.read_u64() == value
    reader.finish()


def test_mixed_sequence_round_trip():
    writer = BorshWriter()
    writer.write_bool(True)
    writer.write_bool(False)
    writer.write_string("test rule_set")
    writer.write_bytes(b"\x00\x01\x02")
    writer.write_fixed(b"\xff" * 32)
    writer.write_u64(200)
    reader = BorshReader(writer.getvalue())
    assert reader.read_bool() is True
    assert reader.read_bool() is False
    assert reader.read_string() == "test rule_set"
    assert reader.read_bytes() == b"\x00\x01\x02"
    assert reader.read_fixed(32) == b"\xff" * 32
    assert reader.read_u64() == 200
    reader.finish()


def test_fixed_has_no_prefix():
    writer = BorshWriter()
    writer.write_fixed(b"abc")
    assert writer.getvalue() == b"abc"


def test_u8_out_of_range_rejected():
    writer = BorshWriter()
    with pytest.raises(ValueError):
        writer.write_u8(256)
    assert writer.getvalue() == b""


def test_u32_out_of_range_rejected():
    writer = BorshWriter()
    with pytest.raises(ValueError):
        writer.write_u32(2**32)
    assert writer.getvalue() == b""


def test_u64_out_of_range_rejected():
    writer = BorshWriter()
    with pytest.raises(ValueError):
        writer.write_u64(2**64)
    assert writer.getvalue() == b""


def test_negative_u64_rejected():
    writer = BorshWriter()
    with pytest.raises(ValueError):
        writer.write_u64(-1)
    assert writer.getvalue() == b""


def test_bool_is_not_an_integer_for_writer():
    writer = BorshWriter()
    with pytest.raises(TypeError):
        writer.write_u8(True)


def test_invalid_bool_byte_rejected():
    reader = BorshReader(bytes([2]))
    with pytest.raises(RuleSetException) as info:
        reader.read_bool()
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR


def test_truncated_input_rejected():
    writer = BorshWriter()
    writer.write_u32(10)
    reader = BorshReader(writer.getvalue() + b"short")
    with pytest.raises(RuleSetException) as info:
        reader.read_bytes()
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR


def test_invalid_utf8_rejected():
    writer = BorshWriter()
    writer.write_bytes(b"\xff\xfe")
    reader = BorshReader(writer.getvalue())
    with pytest.raises(RuleSetException) as info:
        reader.read_string()
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR


def test_finish_rejects_trailing_data():
    writer = BorshWriter()
    writer.write_u8(1)
    writer.write_u8(2)
    reader = BorshReader(writer.getvalue())
    assert reader.read_u8() == 1
    with pytest.raises(RuleSetException) as info:
        reader.finish()
    assert info.value.error is RuleSetError.BORSH_DESERIALIZATION_ERROR