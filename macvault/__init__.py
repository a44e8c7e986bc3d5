"""
MacVault - SHA-256 and HMAC-SHA256 implemented from scratch.

Verification of a MAC is left to the caller and must use a constant-time
comparison (hmac.compare_digest).
"""

__version__ = "1.0.0"
