# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-02
"""
Symbol interning.

Cross-reference maps key by identifier/path *symbols*. A `Symbol` is a `str`
subclass, so it hashes and compares like the plain string (a lookup with
`"sources"` finds the entry keyed by the interned `sources`), while identity
tells symbols from different pools apart: after `SymbolTable.clear()` the same
text interns to a fresh object.
"""

from __future__ import annotations

from typing import Dict, Iterator


class Symbol(str):
	"""Canonical string issued by a `SymbolTable`."""

	__slots__ = ()


class SymbolTable:
	"""Pool of canonical strings owned by one analysis run."""

	def __init__(self) -> None:
		self._pool: Dict[str, Symbol] = {}

	def intern(self, text: str) -> str:
		if not text:
			return ""
		sym = self._pool.get(text)
		if sym is None:
			sym = Symbol(text)
			self._pool[sym] = sym
		return sym

	def clear(self) -> None:
		self._pool.clear()

	def __contains__(self, text: object) -> bool:
		return text in self._pool

	def __len__(self) -> int:
		return len(self._pool)

	def __iter__(self) -> Iterator[Symbol]:
		return iter(self._pool.values())


__all__ = ["Symbol", "SymbolTable"]
