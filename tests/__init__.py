"""
Test Suite

Contains unit tests for the Intrinio client library.

Structure:
- tests/unit/: Tests for individual components (encoder, decoder, errors, catalog, client)

Live API checks live in scripts/smoke_test.py and need real credentials.

Uses pytest with pytest-asyncio for testing async functionality.
"""
