# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

from gnscope.model.code_model import CodeModel


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
	"""
	Write `{relative path: text}` below tmp_path and return the root.

	A `.gn` dotfile is added unless the mapping names one.
	"""

	def write(files: Dict[str, str]) -> Path:
		if ".gn" not in files:
			files = {".gn": "", **files}
		for rel, text in files.items():
			path = tmp_path / rel
			path.parent.mkdir(parents=True, exist_ok=True)
			path.write_text(text)
		return tmp_path

	return write


@pytest.fixture
def model() -> CodeModel:
	return CodeModel()
