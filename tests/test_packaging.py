import os

import pytest

tomllib = pytest.importorskip("tomllib")

_PYPROJECT = os.path.join(os.path.dirname(os.path.dirname(__file__)), "pyproject.toml")


def test_only_the_cli_module_is_installed_top_level():
    with open(_PYPROJECT, "rb") as fh:
        data = tomllib.load(fh)
    setuptools_cfg = data["tool"]["setuptools"]
    assert setuptools_cfg["py-modules"] == ["cli"]
    assert setuptools_cfg["packages"] == ["podtato"]
    assert data["project"]["scripts"]["podtato"] == "cli:main"
