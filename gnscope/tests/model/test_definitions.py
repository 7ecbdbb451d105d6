# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from gnscope.model.code_model import CodeModel
from gnscope.model.options import ModelOptions


def _snapshot(model: CodeModel) -> dict:
	def refs(index):
		return {k: [(n.path, n.line, n.column) for n in v] for k, v in index.items()}

	return {
		"lhs": refs(model.all_lhs),
		"rhs": refs(model.all_rhs),
		"func": refs(model.all_func_refs),
		"imports": refs(model.all_imports),
		"defs": {k: [(s.node.path, s.node.line) for s in v] for k, v in model.all_object_defs.items()},
		"unnamed": len(model.all_unnamed_objects),
		"unresolved": len(model.all_unresolved_imports),
		"dynamic": len(model.unresolved_dynamic_refs),
		"declared": [n.value for n in model.declared_args],
		"files": model.file_list(),
	}


def test_identifier_resolves_to_unique_definition(write_project, model):
	root = write_project({"BUILD.gn": 'executable("app") {\n}\nalias = app\n'})
	assert model.parse_directory(root).ok
	(ref,) = model.all_rhs["app"]
	(app,) = model.all_object_defs["app"]
	assert model.find_definition(ref) is app.node
	assert app.node.rule == "call"


def test_ambiguous_names_do_not_resolve(write_project, model):
	root = write_project(
		{
			"a/BUILD.gn": 'group("dup") {\n}\n',
			"b/BUILD.gn": 'group("dup") {\n}\nx = dup\n',
		}
	)
	model.parse_directory(root)
	assert len(model.all_object_defs["dup"]) == 2
	(ref,) = model.all_rhs["dup"]
	assert model.find_definition(ref) is None
	assert model.find_definition(None) is None


def test_label_strings_resolve_across_files(write_project, model):
	root = write_project(
		{
			"BUILD.gn": 'group("all") {\n  deps = [ "//sub:base" ]\n}\n',
			"sub/BUILD.gn": 'source_set("base") {\n}\n',
		}
	)
	assert model.parse_directory(root).ok
	base = model.all_object_defs["base"][0].node
	assert model.find_from_path("//sub:base") is base
	assert model.find_from_path("//sub:nothing") is None
	assert model.find_from_path("") is None
	assert model.find_from_path("a:b:c") is None
	sub_file = model.get_scope(str(root / "sub" / "BUILD.gn"))
	assert model.find_from_path("//sub/BUILD.gn") is sub_file.node

	node = model.find_node_at(str(root / "BUILD.gn"), 2, 14)
	assert node is not None and node.value == '"//sub:base"'
	assert model.find_definition(node) is base
	assert model.find_node_at("BUILD.gn", 2, 14) is node
	assert model.find_node_at(str(root / "nope.gn"), 1, 1) is None


def test_label_lookups_leave_the_model_unchanged(tmp_path: Path):
	(tmp_path / ".gn").write_text("")
	(tmp_path / "ROOT.gn").write_text('group("all") {\n  deps = [ "//lib:core" ]\n}\n')
	(tmp_path / "lib").mkdir()
	(tmp_path / "lib" / "BUILD.gn").write_text('static_library("core") {\n}\n')
	model = CodeModel(ModelOptions(build_file_patterns=("ROOT.gn",)))
	assert model.parse_directory(tmp_path).ok
	before = _snapshot(model)
	lib_file = str(tmp_path / "lib" / "BUILD.gn")
	assert lib_file not in model.file_list()
	assert model.find_from_path("//lib:core") is None
	assert model.find_from_path("//lib/BUILD.gn") is None
	assert _snapshot(model) == before


def test_reanalysis_is_idempotent(write_project, model):
	root = write_project(
		{
			"BUILD.gn": (
				'import("//build/defs.gni")\n'
				"declare_args() {\n  use_x = false\n}\n"
				'executable("app") {\n  deps = [ ":lib", "//other:thing" ]\n  sources = [ "$gen_dir/a.cc" ]\n}\n'
				'group(target_name) {\n}\n'
				'import("//missing.gni")\n'
			),
			"build/defs.gni": 'gen_dir = "//out"\ntemplate("tpl") {\n}\n',
			"other/BUILD.gn": 'tpl("thing") {\n  x = use_x\n}\n',
		}
	)
	model.parse_directory(root)
	first = _snapshot(model)
	old_key = next(k for k in model.all_lhs if k == "use_x")
	model.parse_directory(root)
	assert _snapshot(model) == first
	new_key = next(k for k in model.all_lhs if k == "use_x")
	assert new_key == old_key
	assert new_key is not old_key


def test_clear_drops_everything(write_project, model):
	root = write_project({"BUILD.gn": 'import("//missing.gni")\nx = 1\n'})
	model.parse_directory(root)
	model.clear()
	assert model.files == {}
	assert model.all_lhs == {}
	assert model.all_unresolved_imports == []
	assert model.diagnostics.diagnostics == []
	assert model.source_root == ""
	assert model.is_known_var("sources")
