"""
HMAC-SHA256 Implementation (From Scratch)

Keyed-hash message authentication code as defined in FIPS 198-1 / RFC 2104,
built on the SHA-256 engine in this package:

    MAC(text) = H((K0 ^ opad) || H((K0 ^ ipad) || text))

Key normalization to the 64-byte SHA-256 block size:
- len(K) == B: K0 = K
- len(K) >  B: K0 = H(K) || 00...00
- len(K) <  B: K0 = K  || 00...00

The full 256-bit MAC is always returned. Callers that truncate must do so
themselves, and callers that verify a MAC must compare with a constant-time
function such as hmac.compare_digest.
"""

import logging
from typing import Union

from .sha256 import sha256, _byte_length, _check_length, BytesLike


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

BLOCK_SIZE = 64   # B: SHA-256 input block size in bytes
DIGEST_SIZE = 32  # L: SHA-256 output size in bytes

IPAD_BYTE = 0x36
OPAD_BYTE = 0x5c


# ============================================================================
# Key handling
# ============================================================================

def _as_bytes(value: BytesLike, name: str) -> bytes:
    """Copy a bytes-like argument, rejecting text and plain sequences."""
    if isinstance(value, str):
        raise TypeError(f"{name} must be bytes, not str (encode it first)")
    with memoryview(value) as view:
        return view.tobytes()


def wipe(buffer: Union[bytearray, memoryview, bytes]) -> None:
    """
    Best-effort zeroization of a sensitive buffer.

    bytearray and writable memoryview objects are overwritten in place,
    whatever the item format of the view. Immutable bytes cannot be
    cleared from Python and are left untouched.

    Raises:
        ValueError: If a writable memoryview is not contiguous
    """
    if isinstance(buffer, bytearray):
        buffer[:] = bytes(len(buffer))
    elif isinstance(buffer, memoryview) and not buffer.readonly:
        if not buffer.c_contiguous:
            raise ValueError("Cannot wipe a non-contiguous memoryview")
        with buffer.cast('B') as raw:
            raw[:] = bytes(raw.nbytes)


def normalize_key(key: BytesLike) -> bytearray:
    """
    Derive the 64-byte key block K0 from a key of any length.

    Args:
        key: Secret key (any length, including empty)

    Returns:
        A fresh 64-byte bytearray. It holds secret material; pass it to
        wipe() once it is no longer needed.
    """
    key = _as_bytes(key, "key")

    if len(key) > BLOCK_SIZE:
        logger.debug("hmac: key longer than block size, hashing it first")
        key = sha256(key)

    # Covers both the hashed (32-byte) key and short keys
    k0 = bytearray(key)
    k0.extend(b'\x00' * (BLOCK_SIZE - len(k0)))
    return k0


def _xor_pad(k0: bytearray, pad_byte: int) -> bytearray:
    """XOR every byte of K0 with a fixed pad byte."""
    return bytearray(b ^ pad_byte for b in k0)


# ============================================================================
# HMAC
# ============================================================================

def hmac_sha256(key: BytesLike, message: BytesLike) -> bytes:
    """
    Compute HMAC-SHA256 of a message.

    Args:
        key: Secret key bytes (any length)
        message: Data to authenticate

    Returns:
        32-byte MAC

    Raises:
        TypeError: If key or message is a str or not bytes-like
        InputTooLarge: If the inner hash input would not fit the SHA-256
            64-bit length field

    Example:
        >>> hmac_sha256(b"\\x0b" * 20, b"Hi There").hex()[:16]
        'b0344c61d8db3853'
    """
    # Inner hash input is one key block plus the message
    _check_length(BLOCK_SIZE + _byte_length(message))
    message = _as_bytes(message, "message")

    k0 = normalize_key(key)
    inner_pad = _xor_pad(k0, IPAD_BYTE)
    outer_pad = _xor_pad(k0, OPAD_BYTE)
    inner_input = inner_pad + message
    try:
        inner = sha256(inner_input)
        outer_input = outer_pad + inner
        try:
            return sha256(outer_input)
        finally:
            wipe(outer_input)
    finally:
        for buffer in (k0, inner_pad, outer_pad, inner_input):
            wipe(buffer)


def hmac_sha256_hex(key: BytesLike, message: BytesLike) -> str:
    """Compute HMAC-SHA256 and return it as a 64-character hex string."""
    return hmac_sha256(key, message).hex()


class HmacSha256:
    """
    HMAC-SHA256 bound to a single key.

    Holds a private copy of the key only; every compute() call derives
    its own key block and working buffers, so repeated calls with the
    same message always give the same MAC.

    Example:
        >>> mac = HmacSha256(b"Jefe")
        >>> mac.compute_hex(b"what do ya want for nothing?")[:16]
        '5bdcc146bf60754e'
    """

    def __init__(self, key: BytesLike):
        """
        Initialize HMAC with a key.

        Args:
            key: Secret key bytes of any length
        """
        self._key = bytearray(_as_bytes(key, "key"))

    @property
    def block_size(self) -> int:
        """Block size B in bytes."""
        return BLOCK_SIZE

    @property
    def digest_size(self) -> int:
        """MAC size L in bytes."""
        return DIGEST_SIZE

    def compute(self, message: BytesLike) -> bytes:
        """
        Compute the MAC of a message under this key.

        Args:
            message: Data to authenticate

        Returns:
            32-byte MAC

        Raises:
            ValueError: If clear() has been called
        """
        if self._key is None:
            raise ValueError("key has been cleared")
        return hmac_sha256(self._key, message)

    def compute_hex(self, message: BytesLike) -> str:
        """Compute the MAC and return it as a hex string."""
        return self.compute(message).hex()

    def clear(self) -> None:
        """Wipe the stored key. Later compute() calls raise ValueError."""
        if self._key is not None:
            wipe(self._key)
            self._key = None

    def __repr__(self) -> str:
        if self._key is None:
            return "HmacSha256(key=<cleared>)"
        return f"HmacSha256(key=<{len(self._key)} bytes>)"


# Self-test when run directly
if __name__ == "__main__":
    # RFC 4231 test cases
    test_cases = [
        (b"\x0b" * 20, b"Hi There",
         "b0344c61d8db38535ca8afceaf0bf12b881dc200c9833da726e9376c2e32cff7"),
        (b"Jefe", b"what do ya want for nothing?",
         "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"),
        (b"\xaa" * 131, b"Test Using Larger Than Block-Size Key - Hash Key First",
         "60e431591ee0b67f0d8a26aacbf5b77f8e0bc6213728c5140546040f0ee37f54"),
    ]

    print("HMAC-SHA256 Implementation Test")
    print("=" * 60)

    all_passed = True
    for key, data, expected in test_cases:
        result = hmac_sha256_hex(key, data)
        passed = result == expected
        all_passed = all_passed and passed

        status = "PASS" if passed else "FAIL"
        print(f"\nKey:      {len(key)} bytes")
        print(f"Data:     {data[:50]}")
        print(f"Expected: {expected}")
        print(f"Got:      {result}")
        print(f"Status:   {status}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
