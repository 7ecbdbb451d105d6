# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from gnscope.core.symbols import Symbol, SymbolTable


def test_intern_returns_same_object_for_equal_text():
	table = SymbolTable()
	a = table.intern("sources")
	b = table.intern("".join(["sour", "ces"]))
	assert a is b
	assert isinstance(a, Symbol)
	assert len(table) == 1
	assert "sources" in table


def test_interned_symbols_compare_like_plain_strings():
	table = SymbolTable()
	refs = {table.intern("deps"): 1}
	assert refs["deps"] == 1
	assert table.intern("deps") == "deps"


def test_empty_text_is_not_interned():
	table = SymbolTable()
	assert table.intern("") == ""
	assert len(table) == 0


def test_clear_issues_fresh_symbols():
	table = SymbolTable()
	before = table.intern("target_name")
	table.clear()
	after = table.intern("target_name")
	assert after == before
	assert after is not before
