# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

Build files are addressed by (file, line, column) with 1-based coordinates.
A line of 0 means "whole file" (e.g. a file that cannot be opened).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source location (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	length: int = 0

	@classmethod
	def from_loc(cls, loc: Any) -> "Span":
		"""
		Construct a Span from a token or syntax node.

		Anything exposing `path`/`line`/`column` (tokens, `SynTree` nodes) is
		accepted; an existing Span is returned unchanged.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		return cls(
			file=getattr(loc, "path", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			length=getattr(loc, "length", 0) or 0,
		)

	def format(self) -> str:
		parts = [self.file or "<unknown>"]
		if self.line is not None:
			parts.append(str(self.line))
			if self.column is not None:
				parts.append(str(self.column))
		return ":".join(parts)


__all__ = ["Span"]
