"""
Shared pytest fixtures.
"""
import os
import tempfile

import pytest

# app.py reads these at import time
os.environ["HISTORY_DB"] = os.path.join(tempfile.mkdtemp(prefix="strength-tests-"), "history.db")
os.environ.pop("API_KEY", None)

from strength.matches import Match, MatchKind  # noqa: E402


@pytest.fixture
def make_match():
    """Build a candidate located by searching its token in a password."""

    def _make(password, token, kind, occurrence=0, **fields):
        start = -1
        for _ in range(occurrence + 1):
            start = password.index(token, start + 1)
        return Match(start=start, end=start + len(token) - 1, token=token, kind=MatchKind(kind), **fields)

    return _make


@pytest.fixture
def client():
    import app as app_module

    app_module.app.config["TESTING"] = True
    app_module._RATE.clear()
    with app_module.app.test_client() as c:
        yield c
