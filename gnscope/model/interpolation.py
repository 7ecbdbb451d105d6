# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`$` expansion spans inside GN string literals.

Offsets are relative to the text handed in; the code model passes the raw
token value (quotes included) so an offset plus the token column is the
source column.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from gnscope.parser.tokens import unescape

_HEX_ESCAPE_LEN = 5  # $0xff


class DollarKind(Enum):
	NAME = "name"  # $name
	BRACED = "braced"  # ${name}
	HEX = "hex"  # $0xff
	UNTERMINATED = "unterminated"  # ${name without the closing brace


@dataclass(frozen=True)
class Dollar:
	pos: int
	length: int
	name_pos: int = 0
	name_length: int = 0
	kind: DollarKind = DollarKind.NAME

	@property
	def has_name(self) -> bool:
		return self.kind in (DollarKind.NAME, DollarKind.BRACED) and self.name_length > 0

	def name(self, text: str) -> str:
		return text[self.name_pos : self.name_pos + self.name_length]


def find_unescaped_dollar(text: str, start: int = 0) -> int:
	"""Index of the next `$` not preceded by a backslash, -1 when there is none."""
	pos = text.find("$", start)
	while pos > 0 and text[pos - 1] == "\\":
		pos = text.find("$", pos + 1)
	return pos


def _is_name_char(ch: str) -> bool:
	return ch == "_" or (ch.isascii() and ch.isalnum())


def find_dollars(text: str) -> List[Dollar]:
	"""
	All `$` expansions in `text`, left to right.

	An unterminated `${` ends the scan; its entry is the last one returned.
	"""
	out: List[Dollar] = []
	pos = find_unescaped_dollar(text)
	while pos != -1:
		nxt = text[pos + 1 : pos + 2]
		if nxt == "{":
			close = text.find("}", pos + 2)
			if close == -1:
				out.append(Dollar(pos, len(text) - pos, pos + 2, 0, DollarKind.UNTERMINATED))
				break
			dollar = Dollar(pos, close - pos + 1, pos + 2, close - pos - 2, DollarKind.BRACED)
		elif nxt == "0":
			dollar = Dollar(pos, min(_HEX_ESCAPE_LEN, len(text) - pos), kind=DollarKind.HEX)
		else:
			end = pos + 1
			while end < len(text) and _is_name_char(text[end]):
				end += 1
			dollar = Dollar(pos, end - pos, pos + 1, end - pos - 1, DollarKind.NAME)
		out.append(dollar)
		pos = find_unescaped_dollar(text, pos + max(dollar.length, 1))
	return out


def has_expansion(text: str) -> bool:
	return find_unescaped_dollar(text) != -1


__all__ = [
	"Dollar",
	"DollarKind",
	"find_dollars",
	"find_unescaped_dollar",
	"has_expansion",
	"unescape",
]
