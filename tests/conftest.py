#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import json
import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from bril_driver import BrilDriver
from bril_loader import Loader


@pytest.fixture
def write_bril_file(tmp_path: Path):
    def _write(name: str, content: str | dict) -> Path:
        file_path = tmp_path / f"{name}.json"
        if isinstance(content, dict):
            content = json.dumps(content)
        file_path.write_text(dedent(content))
        return file_path

    return _write


@pytest.fixture
def check_single():
    """Check a Bril program given as JSON text.

    Usage:
        def test_something(check_single):
            result = check_single('''
                {"functions": [{"name": "main", "instrs": []}]}
            ''')
            assert not result.has_errors()
    """

    def _check(src: str):
        return BrilDriver().check_text(dedent(src))

    return _check


@pytest.fixture
def check_prog():
    """Check a Bril program given as a decoded JSON value (dicts and lists)."""

    def _check(data: dict):
        program = Loader().load_program(data)
        return BrilDriver().check_program(program)

    return _check


def func(name, instrs, args=None, type=None) -> dict:
    """Build the JSON form of a function."""
    f = {"name": name, "instrs": instrs}
    if args is not None:
        f["args"] = [{"name": n, "type": t} for n, t in args]
    if type is not None:
        f["type"] = type
    return f


def prog(*functions) -> dict:
    return {"functions": list(functions)}


def messages(diagnostics) -> list[str]:
    """Diagnostic messages with their bracketed code stripped."""
    out = []
    for d in diagnostics:
        msg = d.message
        if msg.startswith("[") and "] " in msg:
            msg = msg.split("] ", 1)[1]
        out.append(msg)
    return out


def has_error_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic contains the given error code.

    Args:
        diagnostics: List of Diagnostic objects
        code: Error code string like "TYP-0010" or "[TYP-0010]"

    Returns:
        True if any diagnostic message contains the error code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in d.message for d in diagnostics)
