"""Shared test fixtures for toml-core.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from tomlcore.ast.serializer import AstSerializer
from tomlcore.parser import Session


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "tomlcore"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def session() -> Session:
    """Return a parse session with an empty key registry."""
    return Session()


@pytest.fixture()
def serializer() -> AstSerializer:
    return AstSerializer()
