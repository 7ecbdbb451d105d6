"""
GN lexer + parser.

`Lexer` turns build-file text into `Token`s, `Parser` turns a token stream into
a `SynTree`. The helpers below run both in one call for tools and tests.
"""

from __future__ import annotations

from typing import List, Optional

from gnscope.core.diagnostics import DiagnosticSink
from gnscope.core.symbols import SymbolTable

from .ast import SynTree, dump_tree, first_token, flatten, node_at
from .lexer import Lexer
from .parser import Parser
from .tokens import Token, TokenType


def lex_source(
	text: str,
	path: str = "",
	*,
	symbols: Optional[SymbolTable] = None,
	sink: Optional[DiagnosticSink] = None,
	ignore_comments: bool = True,
) -> List[Token]:
	lexer = Lexer(symbols, sink=sink, ignore_comments=ignore_comments)
	return lexer.tokens(text, path)


def parse_source(
	text: str,
	path: str = "",
	*,
	symbols: Optional[SymbolTable] = None,
	sink: Optional[DiagnosticSink] = None,
) -> Optional[SynTree]:
	"""Parse a whole build file; None when it holds no statements."""
	lexer = Lexer(symbols, sink=sink)
	lexer.set_text(text, path)
	return Parser(sink).parse_statement_list(lexer)


__all__ = [
	"Lexer",
	"Parser",
	"SynTree",
	"Token",
	"TokenType",
	"dump_tree",
	"first_token",
	"flatten",
	"lex_source",
	"node_at",
	"parse_source",
]
