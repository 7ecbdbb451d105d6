# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-04
"""
GN label helpers.

A label is `[path][:name[(toolchain)]]`. `path` is source-root relative when it
starts with `//`, absolute when it starts with `/` and relative to the
referencing file otherwise. Without a `:` the name may be implicit: the last
path segment names the target (`//base` means `//base:base`).

These are pure string functions; nothing here touches the file system.
"""

from __future__ import annotations

import os
from typing import Tuple

PathIdent = Tuple[str, str]

_INVALID: PathIdent = ("", "")


def _find_separator(label: str, start: int = 0) -> int:
	"""Index of the first `:` not preceded by a backslash, or -1."""
	pos = label.find(":", start)
	while pos > 0 and label[pos - 1] == "\\":
		pos = label.find(":", pos + 1)
	return pos


def looks_like_implicit_name_path(label: str) -> bool:
	"""
	True when `label` (holding no `:`) names a target implicitly.

	The label needs a `/`, must not end in `/`, may not contain a backslash or
	an embedded `//`, and its last segment has no `.` extension.
	"""
	if not label or "\\" in label or label.endswith("/"):
		return False
	body = label[2:] if label.startswith("//") else label.lstrip("/")
	if "//" in body:
		return False
	last_slash = label.rfind("/")
	if last_slash == -1:
		return False
	return "." not in label[last_slash + 1 :]


def extract_path_ident(label: str) -> PathIdent:
	"""
	Split a label into `(path, name)`.

	`("", "")` means the label is invalid: two separators, or a toolchain
	suffix directly after the `:`. An empty path with a name means "in the
	referencing file". A toolchain suffix is dropped from the name.
	"""
	if not label:
		return _INVALID
	sep = _find_separator(label)
	if sep == -1:
		if looks_like_implicit_name_path(label):
			return label, label[label.rfind("/") + 1 :]
		return label, ""
	if _find_separator(label, sep + 1) != -1:
		return _INVALID
	paren = label.find("(", sep + 1)
	if paren == sep + 1:
		return _INVALID
	name = label[sep + 1 : paren] if paren != -1 else label[sep + 1 :]
	return label[:sep], name


def label_file(path: str, name: str, build_file_name: str = "BUILD.gn") -> str:
	"""Build file a `path:name` label points into (the path itself without a name)."""
	if not name or not path:
		return path
	if path.endswith("/"):
		return path + build_file_name
	return f"{path}/{build_file_name}"


def resolve_path(path: str, referencing_file: str = "", source_root: str = "") -> str:
	"""
	Canonical absolute path for a GN path.

	Returns "" when the path cannot be resolved (NUL bytes, a `//` path without
	a source root, a relative path with neither a referencing file nor a
	source root). The target does not need to exist.
	"""
	if "\0" in path or "\0" in referencing_file:
		return ""
	if not path:
		return os.path.normpath(source_root) if source_root else ""
	if path.startswith("//"):
		if not source_root:
			return ""
		full = os.path.join(source_root, path[2:])
	elif path.startswith("/"):
		full = path
	elif referencing_file:
		full = os.path.join(os.path.dirname(os.path.abspath(referencing_file)), path)
	elif source_root:
		full = os.path.join(source_root, path)
	else:
		return ""
	full = os.path.normpath(os.path.abspath(full))
	# normpath keeps a leading `//` on POSIX.
	if full.startswith("//"):
		full = full[1:]
	return full


__all__ = [
	"PathIdent",
	"extract_path_ident",
	"label_file",
	"looks_like_implicit_name_path",
	"resolve_path",
]
