# Core Cryptography Module
"""
Core cryptographic implementations including:
- SHA-256 hashing (FIPS 180-4) - sha256.py
- HMAC-SHA256 message authentication (FIPS 198-1) - hmac_sha256.py

Both are written from scratch; nothing here delegates to hashlib or hmac.
"""

from .sha256 import (
    InputTooLarge,
    sha256,
    sha256_hex,
    sha256_string,
)

from .hmac_sha256 import (
    HmacSha256,
    hmac_sha256,
    hmac_sha256_hex,
    normalize_key,
    wipe,
    BLOCK_SIZE,
    DIGEST_SIZE,
)

__all__ = [
    # SHA-256
    'InputTooLarge',
    'sha256',
    'sha256_hex',
    'sha256_string',
    # HMAC
    'HmacSha256',
    'hmac_sha256',
    'hmac_sha256_hex',
    'normalize_key',
    'wipe',
    'BLOCK_SIZE',
    'DIGEST_SIZE',
]
