from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


@pytest.fixture(scope="module")
def project():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]


def test_theme_is_an_unconditional_dependency(project):
    theme = [dep for dep in project["dependencies"] if dep.startswith("pyqtdarktheme")]
    assert theme == ["pyqtdarktheme>=2.1"]


def test_interpreter_range_matches_theme_package(project):
    assert project["requires-python"] == ">=3.9,<3.13"


def test_console_script(project):
    assert project["scripts"]["tapcalc"] == "tapcalc.main:main"
