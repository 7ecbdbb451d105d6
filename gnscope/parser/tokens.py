# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Token definitions for the GN lexer.

Each punctuation/keyword token maps onto a lark terminal name (see
`grammar.lark`). Names starting with an underscore are filtered out of the
parse tree by lark, so braces/parens/commas never show up as children.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
	IDENT = "identifier"
	STRING = "string"
	INTEGER = "integer"
	PUNCT = "punctuation"
	KEYWORD = "keyword"
	COMMENT = "comment"
	EOF = "eof"
	INVALID = "invalid"


KEYWORDS = {
	"if": "_IF",
	"else": "_ELSE",
	"true": "TRUE",
	"false": "FALSE",
}

# Longest operators first is not required (the lexer tries two characters
# before one), but keep the table grouped by length for readability.
OPERATORS = {
	"+=": "PLUS_ASSIGN",
	"-=": "MINUS_ASSIGN",
	"<=": "LE",
	">=": "GE",
	"==": "EQ",
	"!=": "NE",
	"&&": "AND",
	"||": "OR",
	"(": "_LPAR",
	")": "_RPAR",
	"[": "_LBRACK",
	"]": "_RBRACK",
	"{": "_LBRACE",
	"}": "_RBRACE",
	",": "_COMMA",
	".": "_DOT",
	"=": "ASSIGN",
	"+": "PLUS",
	"-": "MINUS",
	"<": "LT",
	">": "GT",
	"!": "BANG",
}

COMMENT_MARKER = "#"

# Characters a backslash escapes inside a string literal.
STRING_ESCAPES = frozenset("\\$\"")


@dataclass(frozen=True)
class Token:
	"""
	One lexical token.

	Coordinates are 1-based and relative to the file named by `path`. String
	tokens keep their quotes and escape sequences verbatim so that offsets
	into `value` map 1:1 onto source columns.
	"""

	type: TokenType
	line: int = 0
	column: int = 0
	length: int = 0
	value: str = ""
	path: str = ""

	@property
	def is_valid(self) -> bool:
		return self.type is not TokenType.INVALID

	@property
	def is_eof(self) -> bool:
		return self.type is TokenType.EOF

	@property
	def content(self) -> str:
		"""String body without the surrounding quotes (escapes kept)."""
		if self.type is not TokenType.STRING:
			return self.value
		return self.value[1:-1]

	def unescaped(self) -> str:
		"""String body with `\\\\`, `\\$` and `\\"` replaced by the plain character."""
		return unescape(self.content)

	@property
	def terminal(self) -> str:
		"""Name of the lark terminal this token feeds into the grammar."""
		if self.type is TokenType.IDENT:
			return "IDENT"
		if self.type is TokenType.STRING:
			return "STRING"
		if self.type is TokenType.INTEGER:
			return "INTEGER"
		if self.type is TokenType.KEYWORD:
			return KEYWORDS[self.value]
		if self.type is TokenType.PUNCT:
			return OPERATORS[self.value]
		raise ValueError(f"token type {self.type.value} has no grammar terminal")

	def describe(self) -> str:
		if self.type in (TokenType.PUNCT, TokenType.KEYWORD):
			return f"'{self.value}'"
		if self.type is TokenType.EOF:
			return "end of file"
		return self.type.value


def unescape(text: str) -> str:
	out: list[str] = []
	i = 0
	while i < len(text):
		ch = text[i]
		if ch == "\\" and i + 1 < len(text) and text[i + 1] in STRING_ESCAPES:
			out.append(text[i + 1])
			i += 2
			continue
		out.append(ch)
		i += 1
	return "".join(out)


__all__ = ["COMMENT_MARKER", "KEYWORDS", "OPERATORS", "STRING_ESCAPES", "Token", "TokenType", "unescape"]
