"""Unit tests for input validation helpers."""

from flatmerkle.utils.validation import (
    validate_bytes,
    validate_hash,
    validate_hashes,
    validate_index,
    validate_hex_string,
)


class TestValidateBytes:
    
    def test_valid(self):
        assert validate_bytes(b"abc", "data") == (True, "")
    
    def test_bytearray_accepted(self):
        valid, _ = validate_bytes(bytearray(4), "data", expected_length=4)
        assert valid
    
    def test_wrong_type(self):
        valid, err = validate_bytes("abc", "data")
        assert not valid
        assert "must be bytes" in err
    
    def test_wrong_length(self):
        valid, err = validate_bytes(b"abc", "data", expected_length=4)
        assert not valid
        assert err == "data must be 4 bytes, got 3"


class TestValidateHash:
    
    def test_32_bytes(self):
        assert validate_hash(bytes(32))[0]
    
    def test_31_bytes(self):
        valid, err = validate_hash(bytes(31), "leaf")
        assert not valid
        assert err == "leaf must be 32 bytes, got 31"
    
    def test_sequence_reports_position(self):
        valid, err = validate_hashes([bytes(32), bytes(32), bytes(2)], "proof")
        assert not valid
        assert err.startswith("proof[2]")
    
    def test_empty_sequence_valid(self):
        assert validate_hashes([], "proof") == (True, "")


class TestValidateIndex:
    
    def test_valid(self):
        assert validate_index(0)[0]
        assert validate_index(17)[0]
    
    def test_negative(self):
        assert not validate_index(-1)[0]
    
    def test_bool_rejected(self):
        assert not validate_index(True)[0]
    
    def test_float_rejected(self):
        assert not validate_index(1.0)[0]


class TestValidateHexString:
    
    def test_valid_with_prefix(self):
        assert validate_hex_string("0x" + "ab" * 32, "h", 32)[0]
    
    def test_odd_length(self):
        valid, err = validate_hex_string("0xabc", "h")
        assert not valid
        assert "odd length" in err
    
    def test_invalid_chars(self):
        assert not validate_hex_string("0xzz", "h")[0]
    
    def test_wrong_byte_count(self):
        valid, err = validate_hex_string("ab" * 31, "h", 32)
        assert not valid
        assert "must be 32 bytes, got 31" in err
    
    def test_non_string(self):
        assert not validate_hex_string(b"ab", "h")[0]
