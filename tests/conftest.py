# -*- coding: utf-8 -*-
"""pytest configuration"""
import os
import sys

import pytest

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture
def c_source(tmp_path):
    """Write a C file under tmp_path and return its path as str."""

    def _write(text, name="input.c"):
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return str(p)

    return _write
