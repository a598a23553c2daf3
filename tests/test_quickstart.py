"""Test that the quickstart API works for toml-core."""
from __future__ import annotations


def test_quickstart_parse_import() -> None:
    import tomlcore

    assert callable(tomlcore.parse)
    assert callable(tomlcore.parse_document)
    assert callable(tomlcore.loads)


def test_quickstart_version(expected_version: str) -> None:
    import tomlcore

    assert tomlcore.__version__ == expected_version


def test_quickstart_package_name(package_name: str) -> None:
    import tomlcore

    assert tomlcore.__name__ == package_name


def test_quickstart_loads() -> None:
    import tomlcore

    data = tomlcore.loads(
        'title = "TOML Example"  # inline comment\n'
        'owner.name = "Tom"\n'
        "ports = [ 8000, 8001, 8002 ]\n"
    )
    assert data == {
        "title": "TOML Example",
        "owner": {"name": "Tom"},
        "ports": [8000, 8001, 8002],
    }


def test_quickstart_session_rejects_reassignment() -> None:
    import pytest

    import tomlcore

    session = tomlcore.Session()
    session.parse(tomlcore.Rule.KEYVAL, "fruit.apple = 1")
    with pytest.raises(tomlcore.ParseError, match="Key <fruit.apple> is already assigned"):
        session.parse(tomlcore.Rule.KEYVAL, "fruit.apple.smooth = true")


def test_quickstart_rule_by_name() -> None:
    import tomlcore

    assert tomlcore.parse("integer", "0xDEAD_BEEF").value == 3735928559
