"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4.
The whole compression engine is written out here instead of delegating to
hashlib, since HMAC-SHA256 in this package is built directly on top of it.

Components:
- Padding: Pads message to multiple of 512 bits
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds of compression function
- Output: 256-bit (32-byte) digest

Every call owns its own state; the constant tables below are tuples and
are shared read-only between threads.
"""

import logging
import struct
from typing import List, Tuple, Union


logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


# ============================================================================
# Constants
# ============================================================================

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

BLOCK_BYTES = 64

# The length field is a 64-bit unsigned integer
MAX_MESSAGE_BITS = (1 << 64) - 1


# ============================================================================
# Errors
# ============================================================================

class InputTooLarge(ValueError):
    """Raised when a message's bit length does not fit the 64-bit length field."""
    pass


# ============================================================================
# Logical functions
# ============================================================================
# Names follow FIPS 180-4 section 4.1.2. Inputs are 32-bit words; every
# result is masked back to 32 bits.

def _right_rotate(value: int, amount: int) -> int:
    """ROTR^n: circular right rotation of a 32-bit word."""
    value &= MASK_32
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Ch(x, y, z): bits of y where x is set, bits of z where it is clear."""
    # ~x is a negative Python int, hence the mask
    return ((x & y) ^ (~x & z)) & MASK_32


def _maj(x: int, y: int, z: int) -> int:
    """Maj(x, y, z): each output bit is the majority of the three input bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    # Schedule: ROTR7 ^ ROTR18 ^ SHR3
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    # Schedule: ROTR17 ^ ROTR19 ^ SHR10
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    # Rounds, applied to a: ROTR2 ^ ROTR13 ^ ROTR22
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    # Rounds, applied to e: ROTR6 ^ ROTR11 ^ ROTR25
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


# ============================================================================
# Pre-processing
# ============================================================================

def _byte_length(data: BytesLike) -> int:
    """
    Size in bytes of a bytes-like object.

    Anything exposing the buffer protocol is accepted; the size is taken
    from the buffer, so a memoryview over wider items reports its full
    byte count.

    Raises:
        TypeError: If data is a str or does not support the buffer protocol
    """
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    with memoryview(data) as view:
        return view.nbytes


def _check_length(byte_length: int) -> int:
    """
    Return the bit length of a message, refusing lengths the 64-bit
    length field cannot represent.

    Raises:
        InputTooLarge: If byte_length * 8 exceeds MAX_MESSAGE_BITS
    """
    bit_length = byte_length * 8
    if bit_length > MAX_MESSAGE_BITS:
        raise InputTooLarge(
            f"Message of {byte_length} bytes exceeds the SHA-256 limit of "
            f"2^64 - 1 bits"
        )
    return bit_length


def _pad_message(data: bytes) -> bytes:
    """
    Extend a message to a whole number of 64-byte blocks.

    Layout of the result:

        message || 0x80 || 0x00 * k || bit_length (8 bytes, big-endian)

    with the smallest k >= 0 that leaves the 0x80 + zero run ending at
    56 mod 64, so the length field closes the final block. Callers are
    expected to have run _check_length on the message already.
    """
    bit_length = len(data) * 8
    zero_count = (55 - len(data)) % BLOCK_BYTES

    padded = bytearray(data)
    padded.append(0x80)
    padded.extend(bytes(zero_count))
    padded.extend(bit_length.to_bytes(8, byteorder='big'))
    return bytes(padded)


def _bytes_to_words(chunk: bytes) -> List[int]:
    """Split one block into its 16 big-endian 32-bit words."""
    return list(struct.unpack('>16I', chunk))


# ============================================================================
# Compression
# ============================================================================

def _create_message_schedule(words: List[int]) -> List[int]:
    """
    Build W[0..63] from the 16 words of a block.

    W[t] = sigma1(W[t-2]) + W[t-7] + sigma0(W[t-15]) + W[t-16]  (mod 2^32)
    """
    if len(words) != 16:
        raise ValueError(f"Message schedule needs 16 words, got {len(words)}")

    schedule = list(words)
    for t in range(16, 64):
        schedule.append(
            (_sigma1(schedule[t - 2]) + schedule[t - 7]
             + _sigma0(schedule[t - 15]) + schedule[t - 16]) & MASK_32
        )
    return schedule


def _compress(state: Tuple[int, ...], w: List[int]) -> Tuple[int, ...]:
    """
    Run the 64 rounds for one block and fold the result into state.

    Args:
        state: Hash value before this block (8 words)
        w: Message schedule for the block (64 words)

    Returns:
        Hash value after this block
    """
    a, b, c, d, e, f, g, h = state

    for k_t, w_t in zip(K, w):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + k_t + w_t) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
        a, b, c, d, e, f, g, h = (
            (t1 + t2) & MASK_32, a, b, c, (d + t1) & MASK_32, e, f, g
        )

    return tuple(
        (before + after) & MASK_32
        for before, after in zip(state, (a, b, c, d, e, f, g, h))
    )


# ============================================================================
# Public API
# ============================================================================

def sha256(data: BytesLike) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Any bytes-like object (bytes, bytearray, memoryview, array...)

    Returns:
        256-bit (32-byte) digest as bytes

    Raises:
        TypeError: If data is a str or does not support the buffer protocol
        InputTooLarge: If the message bit length does not fit in 64 bits

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    # Checked before copying so oversized input is refused without touching it
    _check_length(_byte_length(data))

    with memoryview(data) as view:
        message = view.tobytes()
    padded = _pad_message(message)
    logger.debug(
        "sha256: %d-byte message, %d block(s)",
        len(message), len(padded) // BLOCK_BYTES
    )

    state = H_INITIAL
    for i in range(0, len(padded), BLOCK_BYTES):
        words = _bytes_to_words(padded[i:i + BLOCK_BYTES])
        w = _create_message_schedule(words)
        state = _compress(state, w)

    return b''.join(word.to_bytes(4, byteorder='big') for word in state)


def sha256_hex(data: BytesLike) -> str:
    """
    Compute SHA-256 hash and return as hexadecimal string.

    Args:
        data: Input bytes to hash

    Returns:
        64-character hexadecimal string
    """
    return sha256(data).hex()


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """
    Compute SHA-256 hash of a string.

    Args:
        text: Input string to hash
        encoding: String encoding (default: utf-8)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    return sha256(text.encode(encoding))


# Self-test when run directly
if __name__ == "__main__":
    # Test vectors from NIST
    test_cases = [
        (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
         "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
        (b"The quick brown fox jumps over the lazy dog",
         "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"),
    ]

    print("SHA-256 Implementation Test")
    print("=" * 60)

    all_passed = True
    for data, expected in test_cases:
        result = sha256_hex(data)
        passed = result == expected
        all_passed = all_passed and passed

        status = "PASS" if passed else "FAIL"
        print(f"\nInput: {data[:50]}{'...' if len(data) > 50 else ''}")
        print(f"Expected: {expected}")
        print(f"Got:      {result}")
        print(f"Status:   {status}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
