"""
Unit tests for the SHA-256 engine.

Tests:
- NIST known-answer vectors
- Bitwise building blocks (rotate, Ch, Maj, sigma functions)
- Padding arithmetic around the 448-mod-512 boundary
- Message schedule and compression
- Cross-check against the cryptography package
"""

import pytest
from cryptography.hazmat.primitives import hashes

from macvault.core_crypto.sha256 import (
    sha256, sha256_hex, sha256_string,
    _right_rotate, _ch, _maj, _sigma0, _sigma1, _big_sigma0, _big_sigma1,
    _pad_message, _bytes_to_words, _create_message_schedule, _compress,
    H_INITIAL, K, MASK_32,
)


def reference_sha256(data: bytes) -> bytes:
    """SHA-256 from the cryptography package, used as an oracle."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    return digest.finalize()


class TestSHA256:
    """Unit tests for SHA-256 implementation."""

    def test_empty_string(self):
        """Test SHA-256 of empty string."""
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert sha256_hex(b"") == expected

    def test_abc(self):
        """Test SHA-256 of 'abc'."""
        expected = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        assert sha256_hex(b"abc") == expected

    def test_long_message(self):
        """Test SHA-256 of the two-block NIST message."""
        msg = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
        expected = "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"
        assert sha256_hex(msg) == expected

    def test_quick_brown_fox(self):
        msg = b"The quick brown fox jumps over the lazy dog"
        expected = "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"
        assert sha256_hex(msg) == expected

    def test_deterministic(self):
        """SHA-256 should be deterministic."""
        msg = b"test message"
        assert sha256(msg) == sha256(msg)

    def test_returns_32_bytes(self):
        """SHA-256 should return 32 bytes."""
        digest = sha256(b"test")
        assert isinstance(digest, bytes)
        assert len(digest) == 32

    def test_different_inputs_different_hashes(self):
        """Different inputs should produce different hashes."""
        assert sha256(b"a") != sha256(b"b")

    def test_string_helper(self):
        """sha256_string should hash the UTF-8 encoding."""
        assert sha256_string("abc") == sha256(b"abc")
        assert sha256_string("héllo") == sha256("héllo".encode("utf-8"))

    def test_bytearray_and_memoryview_inputs(self):
        """Bytes-like inputs hash the same as bytes."""
        expected = sha256(b"abc")
        assert sha256(bytearray(b"abc")) == expected
        assert sha256(memoryview(b"abc")) == expected

    def test_input_not_mutated(self):
        """The caller's buffer is left as it was."""
        data = bytearray(b"keep me")
        sha256(data)
        assert data == bytearray(b"keep me")

    @pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
    def test_matches_reference(self, length):
        """Digests agree with the cryptography package across block edges."""
        data = bytes((i * 31 + 7) & 0xFF for i in range(length))
        assert sha256(data) == reference_sha256(data)


class TestBitwiseFunctions:
    """Tests for the 32-bit logical functions."""

    def test_right_rotate(self):
        assert _right_rotate(1, 1) == 0x80000000
        assert _right_rotate(0x80000000, 31) == 0x00000001
        assert _right_rotate(0x12345678, 8) == 0x78123456

    def test_right_rotate_stays_32_bit(self):
        """Rotation never produces values wider than 32 bits."""
        for amount in range(1, 32):
            assert _right_rotate(MASK_32, amount) == MASK_32

    def test_ch_selects(self):
        """Ch picks bits of y where x is set, z elsewhere."""
        assert _ch(MASK_32, 0x12345678, 0x9abcdef0) == 0x12345678
        assert _ch(0, 0x12345678, 0x9abcdef0) == 0x9abcdef0
        assert _ch(0xFFFF0000, 0x12345678, 0x9abcdef0) == 0x1234def0

    def test_ch_non_negative(self):
        """~x must not leak a negative Python int."""
        assert _ch(0, 0, MASK_32) == MASK_32
        assert _ch(0, 0, 0) >= 0

    def test_maj(self):
        assert _maj(MASK_32, 0, 0x12345678) == 0x12345678
        assert _maj(MASK_32, MASK_32, 0) == MASK_32
        assert _maj(0, 0, MASK_32) == 0

    def test_sigma_functions_zero(self):
        for fn in (_sigma0, _sigma1, _big_sigma0, _big_sigma1):
            assert fn(0) == 0

    def test_small_sigma_shift_is_logical(self):
        """The shift term in sigma0/sigma1 fills with zeros."""
        # With x = 0x80000000 the shift term is 0x80000000 >> 3
        expected = (_right_rotate(0x80000000, 7)
                    ^ _right_rotate(0x80000000, 18)
                    ^ 0x10000000)
        assert _sigma0(0x80000000) == expected

    def test_big_sigma1_single_bit(self):
        # Bit 0 rotated right by 6, 11 and 25
        assert _big_sigma1(1) == (1 << 26) | (1 << 21) | (1 << 7)

    def test_constant_tables(self):
        assert len(H_INITIAL) == 8
        assert len(K) == 64
        assert H_INITIAL[0] == 0x6a09e667
        assert K[0] == 0x428a2f98
        assert K[63] == 0xc67178f2


class TestPadding:
    """Padding arithmetic: L + 1 + k ≡ 448 (mod 512), then the 64-bit length."""

    @pytest.mark.parametrize("length,padded_length", [
        (0, 64),
        (1, 64),
        (55, 64),
        (56, 128),
        (63, 128),
        (64, 128),
        (119, 128),
        (120, 192),
    ])
    def test_padded_length(self, length, padded_length):
        assert len(_pad_message(b"a" * length)) == padded_length

    @pytest.mark.parametrize("length", [0, 3, 55, 56, 64, 100])
    def test_padding_layout(self, length):
        """Message, then 0x80, then zeros, then the bit length big-endian."""
        data = bytes((i % 251) + 1 for i in range(length))
        padded = _pad_message(data)

        assert padded[:length] == data
        assert padded[length] == 0x80
        assert set(padded[length + 1:-8]) <= {0}
        assert padded[-8:] == (length * 8).to_bytes(8, "big")
        assert len(padded) % 64 == 0

    def test_length_field_big_endian(self):
        padded = _pad_message(b"abc")
        assert padded[-8:] == b"\x00\x00\x00\x00\x00\x00\x00\x18"

    @pytest.mark.parametrize("length", [55, 56, 64])
    def test_boundary_digests(self, length):
        """Digests at the padding boundary are independently verifiable."""
        data = b"\x61" * length
        assert sha256(data) == reference_sha256(data)

    def test_boundary_digests_distinct(self):
        digests = {sha256(b"a" * n) for n in (55, 56, 64)}
        assert len(digests) == 3


class TestCompression:
    """Tests for message schedule and compression."""

    def test_bytes_to_words_big_endian(self):
        words = _bytes_to_words(bytes(range(64)))
        assert len(words) == 16
        assert words[0] == 0x00010203
        assert words[15] == 0x3c3d3e3f

    def test_schedule_extends_to_64(self):
        words = _bytes_to_words(_pad_message(b"abc"))
        w = _create_message_schedule(words)
        assert len(w) == 64
        assert w[:16] == words
        assert all(0 <= word <= MASK_32 for word in w)

    def test_schedule_recurrence(self):
        words = _bytes_to_words(bytes(range(64)))
        w = _create_message_schedule(words)
        for t in range(16, 64):
            expected = (_sigma1(w[t - 2]) + w[t - 7]
                        + _sigma0(w[t - 15]) + w[t - 16]) & MASK_32
            assert w[t] == expected

    def test_schedule_rejects_wrong_word_count(self):
        with pytest.raises(ValueError):
            _create_message_schedule([0] * 15)

    def test_single_block_compression(self):
        """One compression of padded 'abc' from the IV gives the digest."""
        w = _create_message_schedule(_bytes_to_words(_pad_message(b"abc")))
        state = _compress(H_INITIAL, w)
        digest = b"".join(word.to_bytes(4, "big") for word in state)
        assert digest == sha256(b"abc")

    def test_compress_does_not_mutate_iv(self):
        w = _create_message_schedule([0] * 16)
        _compress(H_INITIAL, w)
        assert H_INITIAL[0] == 0x6a09e667
