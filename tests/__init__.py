# Bump Bot Test Suite
"""
Test suite for the bump reminder bot.

Run all tests:
    pytest

Run tracker tests only:
    pytest tests/bump_reminder/ -v
"""
