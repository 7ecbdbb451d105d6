# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from gnscope.core.diagnostics import DiagnosticCollector
from gnscope.parser import Lexer, TokenType, lex_source


def _shape(tokens):
	return [(t.type, t.line, t.column, t.value) for t in tokens]


def test_lexes_assignment_with_list():
	tokens = lex_source('sources += [ "a.cc" ]\n', "BUILD.gn")
	assert _shape(tokens) == [
		(TokenType.IDENT, 1, 1, "sources"),
		(TokenType.PUNCT, 1, 9, "+="),
		(TokenType.PUNCT, 1, 12, "["),
		(TokenType.STRING, 1, 14, '"a.cc"'),
		(TokenType.PUNCT, 1, 21, "]"),
	]
	assert tokens[3].length == 6
	assert tokens[3].content == "a.cc"
	assert all(t.path == "BUILD.gn" for t in tokens)


def test_keywords_need_an_exact_match():
	tokens = lex_source("if (iffy) { x = true } else { x = falsehood }")
	kinds = [(t.type, t.value) for t in tokens if t.type in (TokenType.KEYWORD, TokenType.IDENT)]
	assert kinds == [
		(TokenType.KEYWORD, "if"),
		(TokenType.IDENT, "iffy"),
		(TokenType.IDENT, "x"),
		(TokenType.KEYWORD, "true"),
		(TokenType.KEYWORD, "else"),
		(TokenType.IDENT, "x"),
		(TokenType.IDENT, "falsehood"),
	]


def test_two_character_operators_win():
	values = [t.value for t in lex_source("a<=b!=c&&d||e==f>=g-=1")]
	assert values == ["a", "<=", "b", "!=", "c", "&&", "d", "||", "e", "==", "f", ">=", "g", "-=", "1"]


def test_identifiers_are_interned():
	tokens = lex_source("name = name")
	assert tokens[0].value is tokens[2].value


def test_comments_are_kept_on_request():
	tokens = lex_source("# hello there \nx = 1  # trailing\n", ignore_comments=False)
	assert _shape(tokens)[0] == (TokenType.COMMENT, 1, 1, "hello there")
	assert tokens[-1].type is TokenType.COMMENT
	assert tokens[-1].value == "trailing"
	assert TokenType.COMMENT not in {t.type for t in lex_source("# only a comment\n")}


def test_string_escapes_stay_verbatim():
	tokens = lex_source('x = "a\\"b\\\\" + "\\$y"')
	assert tokens[2].value == '"a\\"b\\\\"'
	assert tokens[2].unescaped() == 'a"b\\'
	assert tokens[4].unescaped() == "$y"


def test_backslash_before_other_characters_is_literal():
	tokens = lex_source('x = "a\\nb\\\\"')
	assert [t.type for t in tokens] == [TokenType.IDENT, TokenType.PUNCT, TokenType.STRING]
	assert tokens[2].value == '"a\\nb\\\\"'
	assert tokens[2].unescaped() == "a\\nb\\"


def test_unterminated_string_is_reported_and_lexing_continues():
	sink = DiagnosticCollector()
	tokens = lex_source('x = "abc\ny = 1\n', "f.gn", sink=sink)
	assert tokens[2].type is TokenType.INVALID
	assert (tokens[2].line, tokens[2].column, tokens[2].value) == (1, 5, '"abc')
	assert [t.value for t in tokens[3:]] == ["y", "=", "1"]
	assert sink.error_count == 1
	diag = sink.errors[0]
	assert diag.code == "E-LEX-STRING"
	assert diag.phase == "lexer"
	assert diag.message == "non-terminated string"
	assert diag.span.format() == "f.gn:1:5"


def test_unexpected_character_is_reported():
	sink = DiagnosticCollector()
	tokens = lex_source("x = @", sink=sink)
	assert tokens[-1].type is TokenType.INVALID
	assert not tokens[-1].is_valid
	assert sink.errors[0].code == "E-LEX-CHAR"
	assert "'@'" in sink.errors[0].message


def test_line_endings_and_columns():
	tokens = lex_source("a\r\n  b\rc\n")
	assert [(t.value, t.line, t.column) for t in tokens] == [("a", 1, 1), ("b", 2, 3), ("c", 3, 1)]


def test_peek_and_eof():
	lexer = Lexer()
	lexer.set_text("a b c", "p.gn")
	assert lexer.peek(2).value == "b"
	assert lexer.peek().value == "a"
	assert lexer.next_token().value == "a"
	assert lexer.next_token().value == "b"
	assert lexer.next_token().value == "c"
	assert lexer.next_token().is_eof
	assert lexer.next_token().is_eof
	with pytest.raises(ValueError):
		lexer.peek(0)


def test_integers_are_digit_runs():
	tokens = lex_source("n = 0123x")
	assert [(t.type, t.value) for t in tokens[2:]] == [(TokenType.INTEGER, "0123"), (TokenType.IDENT, "x")]
