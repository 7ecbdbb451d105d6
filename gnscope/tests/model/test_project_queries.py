# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from gnscope.model import queries
from gnscope.model.queries import Location, XRef

BUILD = """import("//missing.gni")
declare_args() {
  use_x = false
}
group("all") {
  deps = [ ":lib" ]
}
source_set("lib") {
  if (use_x) {
    defines = [ "X" ]
  }
}
group(target_name) {
}
path = "//$root_out_dir:gen"
"""


def test_queries_over_one_file(write_project, model):
	root = write_project({"BUILD.gn": BUILD})
	result = model.parse_directory(root)
	assert result.ok
	assert queries.lhs_only(model) == ["defines", "deps", "path"]
	assert queries.rhs_only(model) == ["root_out_dir", "target_name"]
	assert queries.declared_arg_names(model) == ["use_x"]
	assert queries.unresolved_imports(model) == [Location("BUILD.gn", 1, 8)]
	assert queries.unnamed_objects(model) == [Location("BUILD.gn", 13, 7)]
	assert queries.dynamic_refs(model) == [Location("BUILD.gn", 15, 8)]
	assert "gen" in model.all_func_refs


def test_xrefs_for_names_and_labels(write_project, model):
	root = write_project({"BUILD.gn": BUILD})
	model.parse_directory(root)
	expected = [XRef("def", Location("BUILD.gn", 8, 1)), XRef("ref", Location("BUILD.gn", 6, 12))]
	assert queries.xrefs(model, "lib") == expected
	assert queries.xrefs(model, ":lib") == expected
	assert [r.format() for r in queries.xrefs(model, "use_x")] == ["Lhs: BUILD.gn:3:3", "Rhs: BUILD.gn:9:7"]
	assert queries.xrefs(model, "a:b:c") == []
	assert queries.xrefs(model, ":$x") == []


def test_xrefs_list_imports_of_a_file(write_project, model):
	root = write_project(
		{
			"BUILD.gn": 'import("//build/config.gni")\n',
			"sub/BUILD.gn": 'import("../build/config.gni")\n',
			"build/config.gni": "flags = []\n",
		}
	)
	model.parse_directory(root)
	refs = queries.xrefs(model, "//build/config.gni")
	assert [r.format() for r in refs] == ["Imp: BUILD.gn:1:8", "Imp: sub/BUILD.gn:1:8"]
	assert refs[0].to_dict() == {"kind": "imp", "path": "BUILD.gn", "line": 1, "column": 8}
