# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from gnscope.model.interpolation import Dollar, DollarKind, find_dollars, find_unescaped_dollar, has_expansion, unescape


def test_three_kinds_of_expansion():
	text = '"hello ${foo}/$bar.txt/$0xff"'
	dollars = find_dollars(text)
	assert dollars == [
		Dollar(7, 6, 9, 3, DollarKind.BRACED),
		Dollar(14, 4, 15, 3, DollarKind.NAME),
		Dollar(23, 5, 0, 0, DollarKind.HEX),
	]
	assert [d.name(text) for d in dollars if d.has_name] == ["foo", "bar"]
	assert text[23:28] == "$0xff"


def test_escaped_dollar_is_not_an_expansion():
	assert find_unescaped_dollar("a\\$b") == -1
	assert find_unescaped_dollar("a\\$b$c") == 4
	assert find_dollars('"\\$notavar"') == []
	assert not has_expansion("plain")


def test_unterminated_brace_ends_the_scan():
	dollars = find_dollars('"${foo" + "$bar"')
	assert len(dollars) == 1
	assert dollars[0].kind is DollarKind.UNTERMINATED
	assert dollars[0].pos == 1


def test_lone_dollar_has_no_name():
	(dollar,) = find_dollars('"$"')
	assert dollar.kind is DollarKind.NAME
	assert dollar.name_length == 0
	assert not dollar.has_name


def test_unescape():
	assert unescape('a\\"b\\\\c\\$d\\n') == 'a"b\\c$d\\n'
