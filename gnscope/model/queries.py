# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Project-wide queries over a built `CodeModel`.

Locations are reported relative to the source root, the way the browser lists
them (`path:line:col`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List

from gnscope.parser.ast import SynTree

from .code_model import CodeModel
from .interpolation import has_expansion
from .labels import extract_path_ident

XREF_DEF = "def"
XREF_REF = "ref"
XREF_LHS = "lhs"
XREF_RHS = "rhs"
XREF_IMP = "imp"


@dataclass(frozen=True)
class Location:
	path: str
	line: int
	column: int

	@classmethod
	def of(cls, model: CodeModel, node: SynTree) -> "Location":
		return cls(model.relative_path(node.path), node.line, node.column)

	def format(self) -> str:
		return f"{self.path}:{self.line}:{self.column}"

	def to_dict(self) -> dict:
		return {"path": self.path, "line": self.line, "column": self.column}


@dataclass(frozen=True)
class XRef:
	kind: str
	location: Location

	def format(self) -> str:
		return f"{self.kind.capitalize()}: {self.location.format()}"

	def to_dict(self) -> dict:
		return {"kind": self.kind, **self.location.to_dict()}


def _locations(model: CodeModel, nodes: Iterable[SynTree]) -> List[Location]:
	return [Location.of(model, n) for n in nodes]


def lhs_only(model: CodeModel) -> List[str]:
	"""Variables that are written but never read."""
	return sorted(name for name in model.all_lhs if name not in model.all_rhs)


def rhs_only(model: CodeModel) -> List[str]:
	"""Variables that are read but never written (mostly built-ins and template parameters)."""
	return sorted(name for name in model.all_rhs if name not in model.all_lhs)


def declared_arg_names(model: CodeModel) -> List[str]:
	return sorted({node.value for node in model.declared_args})


def unresolved_imports(model: CodeModel) -> List[Location]:
	return _locations(model, model.all_unresolved_imports)


def unnamed_objects(model: CodeModel) -> List[Location]:
	"""Named-object declarations whose name is computed (position of the name argument)."""
	nodes = [scope.params or scope.node for scope in model.all_unnamed_objects]
	return _locations(model, [n for n in nodes if n is not None])


def dynamic_refs(model: CodeModel) -> List[Location]:
	return _locations(model, model.unresolved_dynamic_refs)


def xrefs(model: CodeModel, text: str, caller_path: str = "") -> List[XRef]:
	"""
	Cross-references for an identifier or a label.

	A label's name selects definitions, references and variable accesses; its
	path (when it names an existing file) selects the imports of that file. A
	bare word that is not an existing path is taken as a name.
	"""
	path, name = extract_path_ident(text)
	if (not path and not name) or has_expansion(name):
		return []
	if name:
		path = model.resolve_path(path, caller_path) if path else ""
	else:
		resolved = model.resolve_path(path, caller_path)
		if resolved and os.path.exists(resolved):
			path = resolved
		else:
			path, name = "", path

	out: List[XRef] = []
	for scope in model.all_object_defs.get(name, []):
		if scope.node is not None:
			out.append(XRef(XREF_DEF, Location.of(model, scope.node)))
	for kind, index in ((XREF_REF, model.all_func_refs), (XREF_LHS, model.all_lhs), (XREF_RHS, model.all_rhs)):
		out.extend(XRef(kind, loc) for loc in _locations(model, index.get(name, [])))
	if path:
		out.extend(XRef(XREF_IMP, loc) for loc in _locations(model, model.all_imports.get(path, [])))
	return out


__all__ = [
	"Location",
	"XREF_DEF",
	"XREF_IMP",
	"XREF_LHS",
	"XREF_REF",
	"XREF_RHS",
	"XRef",
	"declared_arg_names",
	"dynamic_refs",
	"lhs_only",
	"rhs_only",
	"unnamed_objects",
	"unresolved_imports",
	"xrefs",
]
