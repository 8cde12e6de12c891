"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import `lazyload_lib`
and `tests.helpers` without an editable install.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def registrar():
    from lazyload_lib.main import create_registrar

    # A fresh registry per test instead of resetting a shared one
    return create_registrar()
