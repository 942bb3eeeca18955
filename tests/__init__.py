#!/usr/bin/env python3
"""
Test suite for the buddy finder.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Skip tests that need a database (they use in-memory SQLite)
    uv run python -m pytest tests/ -v -m "not db"
"""
