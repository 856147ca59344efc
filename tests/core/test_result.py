"""
Tests for the Result[P] envelope.

Validates:
    - Generic payloads are stored untouched
    - Frozen immutability
    - Default warnings and has_warning()
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyfieldstat.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _make(**overrides):
    kwargs = dict(
        params=FakeParams(value=1.5),
        info={'design': 'CRD'},
        timing=None,
        backend_name='cpu',
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestConstruction:

    def test_fields(self):
        r = _make()
        assert r.params.value == 1.5
        assert r.info == {'design': 'CRD'}
        assert r.timing is None
        assert r.backend_name == 'cpu'

    def test_default_warnings_empty(self):
        assert _make().warnings == ()

    def test_frozen(self):
        r = _make()
        with pytest.raises(FrozenInstanceError):
            r.backend_name = 'gpu'


class TestHasWarning:

    def test_substring_match(self):
        r = _make(warnings=("error mean square is 0; F tests are not estimable",))
        assert r.has_warning("mean square is 0")

    def test_no_match(self):
        r = _make(warnings=("grand mean is -1",))
        assert not r.has_warning("error df")

    def test_no_warnings(self):
        assert not _make().has_warning("anything")
