"""
Test suite for options

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/integration/   : Integration tests (SQLAlchemy + SQLite, pydantic models)
"""
