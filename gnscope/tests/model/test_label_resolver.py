# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from gnscope.model.labels import extract_path_ident, label_file, looks_like_implicit_name_path, resolve_path


@pytest.mark.parametrize(
	"label, expected",
	[
		("//a/b:c", ("//a/b", "c")),
		("//a/b", ("//a/b", "b")),
		(":c", ("", "c")),
		("a/b.c", ("a/b.c", "")),
		("a:b:c", ("", "")),
		("", ("", "")),
		("foo", ("foo", "")),
		("//base", ("//base", "base")),
		("//a/b/", ("//a/b/", "")),
		("//a:b(//build/toolchain:gcc)", ("", "")),
		("//a:b(gcc)", ("//a", "b")),
		("//a:(//tc)", ("", "")),
		("C:\\dir\\file", ("C", "\\dir\\file")),
		("a\\:b", ("a\\:b", "")),
	],
)
def test_extract_path_ident(label, expected):
	assert extract_path_ident(label) == expected


def test_implicit_name_shape():
	assert looks_like_implicit_name_path("//third_party/zlib")
	assert looks_like_implicit_name_path("sub/dir")
	assert not looks_like_implicit_name_path("zlib")
	assert not looks_like_implicit_name_path("//a/b.gni")
	assert not looks_like_implicit_name_path("//a//b")
	assert not looks_like_implicit_name_path("a\\b/c")
	assert not looks_like_implicit_name_path("//a/")


def test_resolve_path_against_root_and_referencing_file():
	ref = "/proj/sub/BUILD"
	assert resolve_path("//x/y", ref, "/proj") == "/proj/x/y"
	assert resolve_path("z", ref, "/proj") == "/proj/sub/z"
	assert resolve_path("", ref, "/proj") == "/proj"
	assert resolve_path("../up.gni", ref, "/proj") == "/proj/up.gni"
	assert resolve_path("/abs/file.gni", ref, "/proj") == "/abs/file.gni"
	assert resolve_path("z", "", "/proj") == "/proj/z"


def test_resolve_path_never_raises_on_bad_input():
	assert resolve_path("//x", "", "") == ""
	assert resolve_path("a\0b", "", "/proj") == ""
	assert resolve_path("z", "", "") == ""


def test_label_file_appends_build_file_for_named_labels():
	assert label_file("//a/b", "c") == "//a/b/BUILD.gn"
	assert label_file("//", "c") == "//BUILD.gn"
	assert label_file("//a/b", "c", "BUILD") == "//a/b/BUILD"
	assert label_file("//a/b.gni", "") == "//a/b.gni"
