# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-02
"""
Line-oriented lexer for GN build files.

The lexer reads its input one line at a time and produces `Token`s with
1-based coordinates. Malformed input never raises: unterminated strings and
stray characters become INVALID tokens and are reported into the sink, so the
parser can keep going and still report later problems.
"""

from __future__ import annotations

import io
import string
from collections import deque
from typing import Deque, Iterator, List, Optional, TextIO

from gnscope.core.diagnostics import PHASE_LEXER, SEVERITY_ERROR, DiagnosticSink
from gnscope.core.symbols import SymbolTable

from .tokens import COMMENT_MARKER, KEYWORDS, OPERATORS, STRING_ESCAPES, Token, TokenType

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)


class Lexer:
	"""
	Tokenizer with one-token (or deeper) lookahead.

	Identifier values and the source path are interned through `symbols`, so
	the same identifier anywhere in a project yields the same `Symbol`.
	"""

	def __init__(
		self,
		symbols: Optional[SymbolTable] = None,
		*,
		sink: Optional[DiagnosticSink] = None,
		ignore_comments: bool = True,
	) -> None:
		self.symbols = symbols if symbols is not None else SymbolTable()
		self.sink = sink
		self.ignore_comments = ignore_comments
		self._in: Optional[TextIO] = None
		self._path = ""
		self._line = ""
		self._line_nr = 0
		self._col = 0
		self._at_end = False
		self._buffer: Deque[Token] = deque()

	def set_source(self, stream: TextIO, path: str = "") -> None:
		"""Bind a text stream; resets line/column counters and lookahead."""
		self._in = stream
		self._path = self.symbols.intern(path)
		self._line = ""
		self._line_nr = 0
		self._col = 0
		self._at_end = False
		self._buffer.clear()

	def set_text(self, text: str, path: str = "") -> None:
		self.set_source(io.StringIO(text, newline=""), path)

	@property
	def path(self) -> str:
		return self._path

	def next_token(self) -> Token:
		if self._buffer:
			return self._buffer.popleft()
		return self._fetch()

	def peek(self, n: int = 1) -> Token:
		"""Return the n-th upcoming token without consuming it."""
		if n < 1:
			raise ValueError("peek distance must be at least 1")
		while len(self._buffer) < n:
			self._buffer.append(self._fetch())
		return self._buffer[n - 1]

	def tokens(self, text: str, path: str = "") -> List[Token]:
		"""Tokenize `text` completely (EOF excluded)."""
		self.set_text(text, path)
		return list(self)

	def __iter__(self) -> Iterator[Token]:
		tok = self.next_token()
		while not tok.is_eof:
			yield tok
			tok = self.next_token()

	def _fetch(self) -> Token:
		tok = self._scan()
		while tok.type is TokenType.COMMENT and self.ignore_comments:
			tok = self._scan()
		return tok

	def _scan(self) -> Token:
		if self._in is None:
			return Token(TokenType.EOF, path=self._path)
		self._skip_whitespace()
		while self._col >= len(self._line):
			if self._at_end:
				return self._token(TokenType.EOF, 0)
			self._next_line()
			self._skip_whitespace()

		ch = self._line[self._col]
		if ch == "\"":
			return self._string()
		if ch in _IDENT_START:
			return self._ident()
		if ch in _DIGITS:
			return self._number()
		if ch == COMMENT_MARKER:
			return self._comment()
		pair = self._line[self._col : self._col + 2]
		if len(pair) == 2 and pair in OPERATORS:
			return self._token(TokenType.PUNCT, 2, pair)
		if ch in OPERATORS:
			return self._token(TokenType.PUNCT, 1, ch)
		return self._invalid(1, f"unexpected character '{ch}'", code="E-LEX-CHAR")

	def _next_line(self) -> None:
		assert self._in is not None
		raw = self._in.readline()
		self._col = 0
		if raw == "":
			self._at_end = True
			self._line = ""
			return
		self._line_nr += 1
		if raw.endswith("\r\n"):
			raw = raw[:-2]
		elif raw.endswith(("\n", "\r")):
			raw = raw[:-1]
		self._line = raw

	def _skip_whitespace(self) -> None:
		line = self._line
		while self._col < len(line) and line[self._col].isspace():
			self._col += 1

	def _token(self, tt: TokenType, length: int, value: str = "") -> Token:
		if tt is TokenType.IDENT:
			value = self.symbols.intern(value)
		tok = Token(tt, self._line_nr, self._col + 1, length, value, self._path)
		self._col += length
		return tok

	def _invalid(self, length: int, message: str, *, code: str) -> Token:
		tok = self._token(TokenType.INVALID, length, self._line[self._col : self._col + length])
		if self.sink is not None:
			self.sink.report(SEVERITY_ERROR, tok.path, tok.line, tok.column, message, phase=PHASE_LEXER, code=code)
		return tok

	def _ident(self) -> Token:
		line = self._line
		end = self._col + 1
		while end < len(line) and line[end] in _IDENT_CHARS:
			end += 1
		text = line[self._col : end]
		if text in KEYWORDS:
			return self._token(TokenType.KEYWORD, len(text), text)
		return self._token(TokenType.IDENT, len(text), text)

	def _number(self) -> Token:
		line = self._line
		end = self._col + 1
		while end < len(line) and line[end] in _DIGITS:
			end += 1
		return self._token(TokenType.INTEGER, end - self._col, line[self._col : end])

	def _comment(self) -> Token:
		line = self._line
		return self._token(TokenType.COMMENT, len(line) - self._col, line[self._col + 1 :].strip())

	def _string(self) -> Token:
		# The literal is kept verbatim (quotes and escapes) so that offsets into
		# the value line up with source columns.
		line = self._line
		i = self._col + 1
		while i < len(line):
			ch = line[i]
			if ch == "\\" and i + 1 < len(line) and line[i + 1] in STRING_ESCAPES:
				i += 2
				continue
			if ch == "\"":
				return self._token(TokenType.STRING, i - self._col + 1, line[self._col : i + 1])
			i += 1
		return self._invalid(len(line) - self._col, "non-terminated string", code="E-LEX-STRING")


__all__ = ["Lexer"]
