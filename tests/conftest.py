"""
Pytest configuration and fixtures for bitsy tests.
"""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def sample_source_file(temp_dir):
    """Create a small Bitsy program file for testing."""
    source_file = temp_dir / "hello.bitsy"
    source_file.write_text("BEGIN\n    x = 1 + 2\n    PRINT x\nEND\n", encoding="utf-8")
    return source_file


@pytest.fixture
def compiler():
    """Provide a Compiler instance."""
    from bitsy import Compiler
    return Compiler()
