"""Test suite for Trustshift.

Test structure follows the test pyramid:
- unit/: Unit tests - components in isolation (fakeredis, mocks)
- integration/: Integration tests - real SQL through aiosqlite
- api/: API endpoint tests - HTTP through TestClient
"""
