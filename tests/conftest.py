from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from pycloc.parser import set_output_parser
from tests.cloc_helpers import FAKE_CLOC, write_script


@pytest.fixture(autouse=True)
def _reset_output_parser():
    set_output_parser(None)
    yield
    set_output_parser(None)


@pytest.fixture
def script_factory(tmp_path: Path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str) -> Path:
        return write_script(bin_dir, name, body)

    return _make


@pytest.fixture
def fake_cloc(script_factory) -> Path:
    return script_factory("cloc", FAKE_CLOC)


@pytest.fixture
def sources(tmp_path: Path) -> Path:
    root = tmp_path / "sources"
    (root / "pkg").mkdir(parents=True)
    (root / "main.py").write_text("# entry\n\nprint('hi')\n", encoding="utf-8")
    (root / "pkg" / "util.c").write_text("int x = 1;\n\n", encoding="utf-8")
    (root / "pkg" / "run.sh").write_text("#!/bin/sh\necho ok\n", encoding="utf-8")
    return root


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    root = tmp_path / "empty"
    root.mkdir()
    return root
