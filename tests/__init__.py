# MacVault Test Suite
"""
Test suite including:
- Unit tests for the SHA-256 engine
- HMAC-SHA256 known-answer and property tests
- Security tests (invalid inputs, oversized messages, key wiping)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
