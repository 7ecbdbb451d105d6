# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-03
"""
lark front-end for GN build files.

The grammar lives in `grammar.lark`; tokens are produced by `Lexer` and fed to
lark through its custom-lexer hook, so the parse tree refers to the very same
`Token` objects (identifiers already interned). The lark tree is then turned
into the `SynTree` shape the code model walks.

Tokens are pushed into lark's interactive LALR parser one at a time. A syntax
error is reported into the sink and the offending token skipped, so the caller
gets the best tree that could be built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Set

from lark import Lark, Token as LarkToken, Tree
from lark.exceptions import UnexpectedToken
from lark.lexer import Lexer as LarkLexer
from lark.parsers.lalr_interactive_parser import InteractiveParser

from gnscope.core.diagnostics import PHASE_SYNTAX, SEVERITY_ERROR, DiagnosticSink

from .ast import SynTree
from .lexer import Lexer
from .tokens import KEYWORDS, OPERATORS, Token, TokenType

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_TERMINAL_TEXT = {name: text for text, name in {**KEYWORDS, **OPERATORS}.items()}
_TERMINAL_TEXT.update({"IDENT": "identifier", "STRING": "string", "INTEGER": "integer", "$END": "end of file"})

# Terminals that may close an unfinished construct at the end of input, in
# order of preference. INTEGER stands in for a missing operand.
_CLOSERS = ("_RBRACE", "_RPAR", "_RBRACK", "INTEGER")


class _TokenFeed:
	"""
	Iterator of lark tokens pulled from a `Lexer`.

	Comments and INVALID tokens (already reported by the lexer) are dropped.
	Each lark token's `start_pos` is the index of the originating `Token` in
	`tokens`.
	"""

	def __init__(self, lexer: Lexer) -> None:
		self.lexer = lexer
		self.tokens: List[Token] = []
		self.eof: Optional[Token] = None

	def __iter__(self) -> "_TokenFeed":
		return self

	def __next__(self) -> LarkToken:
		tok = self.lexer.next_token()
		while tok.type in (TokenType.COMMENT, TokenType.INVALID):
			tok = self.lexer.next_token()
		if tok.is_eof:
			self.eof = tok
			raise StopIteration
		index = len(self.tokens)
		self.tokens.append(tok)
		return LarkToken(
			tok.terminal,
			tok.value,
			start_pos=index,
			line=tok.line,
			column=tok.column,
			end_line=tok.line,
			end_column=tok.column + tok.length,
			end_pos=index + 1,
		)

	def end_position(self) -> Token:
		if self.eof is not None:
			return self.eof
		if self.tokens:
			last = self.tokens[-1]
			return Token(TokenType.EOF, last.line, last.column + last.length, 0, "", last.path)
		return Token(TokenType.EOF, 1, 1, 0, "", self.lexer.path)

	def end_token(self) -> LarkToken:
		eof = self.end_position()
		index = len(self.tokens)
		return LarkToken("$END", "", start_pos=index, line=eof.line, column=eof.column, end_pos=index)

	def synthetic(self, terminal: str) -> LarkToken:
		"""Zero-length token at the end of input, used to close open constructs."""
		eof = self.end_position()
		if terminal == "INTEGER":
			tok = Token(TokenType.INTEGER, eof.line, eof.column, 0, "", eof.path)
		else:
			tok = Token(TokenType.PUNCT, eof.line, eof.column, 0, _TERMINAL_TEXT[terminal], eof.path)
		index = len(self.tokens)
		self.tokens.append(tok)
		return LarkToken(terminal, "", start_pos=index, line=eof.line, column=eof.column, end_pos=index)


class _FeedLexer(LarkLexer):
	"""Placeholder lexer: tokens reach the parser through `_TokenFeed`."""

	def __init__(self, lexer_conf) -> None:
		pass

	def lex(self, data: _TokenFeed) -> Iterator[LarkToken]:  # type: ignore[override]
		yield from data


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer=_FeedLexer,
	start=["statement_list", "primary_expr"],
	maybe_placeholders=False,
)


class _TreeBuilder:
	"""Convert a lark tree into `SynTree` nodes, left to right."""

	def __init__(self, feed: _TokenFeed) -> None:
		self.tokens = feed.tokens
		# Rule nodes without any kept token (e.g. an empty `{}` block) borrow the
		# position of the token just before them.
		self.last = Token(TokenType.EOF, 1, 1, 0, "", feed.lexer.path)

	def build(self, node) -> SynTree:
		if isinstance(node, LarkToken):
			tok = self.tokens[node.start_pos]
			self.last = tok
			return SynTree(None, tok)
		assert isinstance(node, Tree)
		before = self.last
		children = [self.build(child) for child in node.children]
		tok = children[0].tok if children else before
		return SynTree(str(node.data), tok, children)


class Parser:
	"""
	GN parser over a `Lexer`.

	`parse_statement_list` parses a whole file, `parse_primary_expr` a single
	primary expression (used for identifiers embedded in strings).
	"""

	MAX_ERRORS = 20

	def __init__(self, sink: Optional[DiagnosticSink] = None) -> None:
		self.sink = sink

	def parse_statement_list(self, lexer: Lexer) -> Optional[SynTree]:
		"""Parse a file; returns None when it holds no statements."""
		tree = self._parse(lexer, "statement_list")
		if tree is None or not tree.children:
			return None
		return tree

	def parse_primary_expr(self, lexer: Lexer) -> Optional[SynTree]:
		return self._parse(lexer, "primary_expr")

	def _parse(self, lexer: Lexer, start: str) -> Optional[SynTree]:
		feed = _TokenFeed(lexer)
		reported: Set[object] = set()
		errors = 0
		state = _PARSER.parse_interactive(start=start)
		for lark_tok in feed:
			try:
				state.feed_token(lark_tok)
			except UnexpectedToken as err:
				errors += 1
				self._report(err.token, err.expected, feed, reported)
				if errors >= self.MAX_ERRORS:
					break
		tree = self._finish(state, feed, reported)
		if tree is None:
			return None
		return _TreeBuilder(feed).build(tree)

	def _finish(self, state: InteractiveParser, feed: _TokenFeed, reported: Set[object]):
		"""
		Feed the end of input. When the input stops inside an open construct,
		the error is reported and the construct closed with synthetic tokens so
		the statements parsed so far are kept.
		"""
		for _ in range(2 * len(feed.tokens) + 2):
			if "$END" in state.choices():
				try:
					return state.feed_token(feed.end_token())
				except UnexpectedToken as err:
					self._report(err.token, err.expected, feed, reported)
					return None
			accepted = state.accepts()
			self._report(None, accepted, feed, reported)
			closer = next((t for t in _CLOSERS if t in accepted), None)
			if closer is None:
				return None
			try:
				state.feed_token(feed.synthetic(closer))
			except UnexpectedToken:
				return None
		return None

	def _report(self, lark_tok: Optional[LarkToken], expected, feed: _TokenFeed, reported: Set[object]) -> None:
		if lark_tok is not None and lark_tok.type != "$END":
			key: object = lark_tok.start_pos
			tok = feed.tokens[lark_tok.start_pos]
			found = tok.describe()
		else:
			key = "$END"
			tok = feed.end_position()
			found = "end of input"
		if key in reported:
			return
		reported.add(key)
		message = f"unexpected {found}"
		expected = sorted(_TERMINAL_TEXT.get(name, name) for name in (expected or ()))
		if expected:
			message += f" (expected {', '.join(expected[:6])}{', ...' if len(expected) > 6 else ''})"
		if self.sink is not None:
			self.sink.report(SEVERITY_ERROR, tok.path, tok.line, tok.column, message, phase=PHASE_SYNTAX, code="E-SYNTAX")


__all__ = ["Parser"]
