# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-05
"""
Lexical scopes of a GN project.

A file, every named object (target, config, template instantiation...) and
every built-in function block (`declare_args() { ... }`) opens a scope.
Scopes own their children; `outer` is a weak back-reference so the owning
graph stays a tree. Imports are shared references to other file scopes.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from gnscope.parser.ast import SynTree

from .keywords import FILE_KIND

RefMap = Dict[str, List[SynTree]]


@dataclass(eq=False)
class Scope:
	kind: str
	name: str = ""
	node: Optional[SynTree] = None  # defining call (or statement list for files)
	params: Optional[SynTree] = None  # argument that supplied the name
	children: List["Scope"] = field(default_factory=list)
	object_defs: Dict[str, "Scope"] = field(default_factory=dict)
	resolved_imports: Dict[str, "Scope"] = field(default_factory=dict)
	unresolved_imports: List[SynTree] = field(default_factory=list)
	lhs: RefMap = field(default_factory=dict)
	rhs: RefMap = field(default_factory=dict)
	func_refs: RefMap = field(default_factory=dict)
	import_refs: RefMap = field(default_factory=dict)
	_outer: Optional["weakref.ReferenceType[Scope]"] = field(default=None, repr=False)

	@property
	def outer(self) -> Optional["Scope"]:
		return self._outer() if self._outer is not None else None

	def add_child(self, kind: str, node: Optional[SynTree] = None) -> "Scope":
		child = Scope(kind=kind, node=node)
		child._outer = weakref.ref(self)
		self.children.append(child)
		return child

	@property
	def is_file(self) -> bool:
		return self.kind == FILE_KIND and self._outer is None

	@property
	def is_named(self) -> bool:
		return bool(self.name) and not self.is_file

	def find_object(self, name: str, recursive: bool = True, imports: bool = True) -> Optional["Scope"]:
		"""
		Named object `name` visible from this scope.

		Looks at objects declared directly here, then (with `recursive`) in
		enclosing scopes, then (with `imports`) in imported files.
		"""
		return self._find_object(name, recursive, imports, set())

	def _find_object(self, name: str, recursive: bool, imports: bool, seen: Set[int]) -> Optional["Scope"]:
		# Files may import each other; visit every scope once.
		if id(self) in seen:
			return None
		seen.add(id(self))
		found = self.object_defs.get(name)
		if found is not None:
			return found
		outer = self.outer
		if recursive and outer is not None:
			found = outer._find_object(name, recursive, imports, seen)
			if found is not None:
				return found
		if imports:
			for imported in self.resolved_imports.values():
				found = imported._find_object(name, recursive, imports, seen)
				if found is not None:
					return found
		return None

	def walk(self) -> Iterator["Scope"]:
		"""Pre-order over this scope and the scopes it owns (imports excluded)."""
		yield self
		for child in self.children:
			yield from child.walk()

	def __repr__(self) -> str:
		return f"Scope({self.kind} {self.name!r}, {len(self.children)} children)"


def add_ref(refs: RefMap, key: str, node: SynTree) -> None:
	refs.setdefault(key, []).append(node)


__all__ = ["RefMap", "Scope", "add_ref"]
