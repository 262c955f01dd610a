"""Pytest configuration for dataknobs_revalid tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_revalid import (  # noqa: E402
    combine_validators,
    compose_validators,
    matches_field,
    min_length,
    pattern,
)


class CallRecorder:
    """Rule double that records its calls and returns a fixed result."""

    def __init__(self, result=False):
        self.result = result
        self.calls = []

    def __call__(self, value, fields=None):
        self.calls.append((value, fields))
        return self.result


@pytest.fixture
def recorder():
    """Factory for recording rule doubles."""
    return CallRecorder


@pytest.fixture
def password_rule():
    """Password chain: at least 8 characters, with letters and numbers."""
    return compose_validators(
        min_length(8),
        pattern(r"[a-zA-Z]", "containsLetters"),
        pattern(r"[0-9]", "containsNumbers"),
    )


@pytest.fixture
def password_form(password_rule):
    """Record validator for a password plus confirmation form."""
    return combine_validators({
        "password": password_rule,
        "passwordConfirm": compose_validators(password_rule, matches_field("password")),
    })
