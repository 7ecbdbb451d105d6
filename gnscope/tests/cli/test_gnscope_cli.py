# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from gnscope import gnscope


def _project(root: Path, build: str) -> Path:
	(root / ".gn").write_text("")
	(root / "BUILD.gn").write_text(build)
	return root


def test_check_reports_summary(tmp_path: Path, capsys):
	_project(tmp_path, "x = 1\n")
	assert gnscope.main(["check", str(tmp_path)]) == 0
	out = capsys.readouterr().out
	assert "1 files, 0 errors, 0 warnings" in out


def test_check_json(tmp_path: Path, capsys):
	_project(tmp_path, 'import("//missing.gni")\n')
	assert gnscope.main(["check", str(tmp_path), "--json"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 0
	assert payload["files"] == ["BUILD.gn"]
	(diag,) = payload["diagnostics"]
	assert diag["code"] == "W-IMPORT-MISSING"
	assert diag["severity"] == "warning"


def test_check_fails_on_errors(tmp_path: Path, capsys):
	_project(tmp_path, "x = = 1\n")
	assert gnscope.main(["check", str(tmp_path)]) == 1
	err = capsys.readouterr().err
	assert "BUILD.gn:1:5: error [E-SYNTAX]" in err


def test_check_without_dotfile(tmp_path: Path, capsys):
	(tmp_path / "BUILD.gn").write_text("x = 1\n")
	assert gnscope.main(["check", str(tmp_path), "--dotfile", ".gnscope-cli-missing-marker"]) == 2
	assert "E-NO-DOTFILE" in capsys.readouterr().err


def test_tokens(tmp_path: Path, capsys):
	src = tmp_path / "a.gn"
	src.write_text("x = 1  # note\n")
	assert gnscope.main(["tokens", str(src)]) == 0
	assert capsys.readouterr().out.splitlines() == ["IDENT 1 1 x", "PUNCT 1 3 =", "INTEGER 1 5 1"]
	assert gnscope.main(["tokens", str(src), "--comments"]) == 0
	assert capsys.readouterr().out.splitlines()[-1] == "COMMENT 1 8 note"


def test_tokens_missing_file(tmp_path: Path, capsys):
	assert gnscope.main(["tokens", str(tmp_path / "missing.gn")]) == 2


def test_parse_with_dump(tmp_path: Path, capsys):
	_project(tmp_path, "x = 1\n")
	(tmp_path / "bad.gni").write_text("x = (\n")
	assert gnscope.main(["parse", str(tmp_path), "--dump"]) == 1
	out = capsys.readouterr().out
	assert f"OK {tmp_path / 'BUILD.gn'}" in out
	assert f"FAILED {tmp_path / 'bad.gni'}" in out
	assert "statement_list\t1:1" in out


def test_query(tmp_path: Path, capsys):
	_project(tmp_path, "x = 1\ny = sources\n")
	assert gnscope.main(["query", str(tmp_path), "lhs-only"]) == 0
	assert capsys.readouterr().out.splitlines() == ["x", "y"]
	assert gnscope.main(["query", str(tmp_path), "rhs-only", "--json"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload == {"query": "rhs-only", "results": [{"builtin": True, "name": "sources"}]}


def test_query_rejects_unknown_kind(tmp_path: Path):
	with pytest.raises(SystemExit):
		gnscope.main(["query", str(tmp_path), "everything"])


def test_xref(tmp_path: Path, capsys):
	_project(tmp_path, 'group("a") {\n}\ngroup("b") {\n  deps = [ ":a" ]\n}\n')
	assert gnscope.main(["xref", str(tmp_path), "a"]) == 0
	assert capsys.readouterr().out.splitlines() == ["Def: BUILD.gn:1:1", "Ref: BUILD.gn:4:12"]


def test_goto(tmp_path: Path, capsys):
	_project(tmp_path, 'group("a") {\n}\ngroup("b") {\n  deps = [ ":a" ]\n}\n')
	assert gnscope.main(["goto", str(tmp_path), "BUILD.gn", "4", "14"]) == 0
	out = capsys.readouterr().out
	assert "BUILD.gn:4:12: string" in out
	assert "definition: BUILD.gn:1:1" in out
	assert gnscope.main(["goto", str(tmp_path), "BUILD.gn", "9", "1"]) == 1
