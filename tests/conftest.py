"""Подключение pytest hook-а для диффов Option."""

from options.testing import pytest_assertrepr_compare  # noqa: F401
