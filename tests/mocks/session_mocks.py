"""Helpers for mocking AsyncSession results."""

from unittest.mock import MagicMock


def make_result(*, one=None, all=None):
    """Mock of the result object returned by ``AsyncSession.exec``."""
    result = MagicMock()
    result.one.return_value = one
    result.all.return_value = all if all is not None else []
    return result
