# tests/conftest.py
import pytest

from pycomb.Parser import Err, Ok, Stream


@pytest.fixture(scope="session")
def ok():
    """Build the expected success: remaining input, output, context."""
    def _make(rest, output, context=None):
        return Ok(Stream(rest), output, {} if context is None else context)

    return _make


@pytest.fixture(scope="session")
def err():
    """Build the expected failure: input at the failure, error, context."""
    def _make(rest, error, context=None):
        return Err(Stream(rest), error, {} if context is None else context)

    return _make
