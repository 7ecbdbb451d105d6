# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Concrete syntax tree for GN build files.

The tree is deliberately untyped: a node is either a terminal (wrapping one
`Token`) or a rule node tagged with the grammar rule name and carrying its
children in source order. Rule nodes borrow the first token of their subtree
for positioning, so every node has a line/column/length.

Nodes compare by identity; the code model stores them in reference lists and
answers "is this the defining node" questions with `is`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .tokens import Token, TokenType

# Grammar rule names (see grammar.lark).
R_STATEMENT_LIST = "statement_list"
R_ASSIGNMENT = "assignment"
R_LVALUE = "lvalue"
R_ASSIGN_OP = "assign_op"
R_CALL = "call"
R_CONDITION = "condition"
R_BLOCK = "block"
R_ARRAY_ACCESS = "array_access"
R_SCOPE_ACCESS = "scope_access"
R_EXPR = "expr"
R_UNARY_EXPR = "unary_expr"
R_UNARY_OP = "unary_op"
R_BINARY_OP = "binary_op"
R_PRIMARY_EXPR = "primary_expr"
R_SCOPE_LITERAL = "scope_literal"
R_LIST_LITERAL = "list_literal"
R_EXPR_LIST = "expr_list"


@dataclass(eq=False)
class SynTree:
	rule: Optional[str]  # None for terminal nodes
	tok: Token
	children: List["SynTree"] = field(default_factory=list)

	@property
	def is_terminal(self) -> bool:
		return self.rule is None

	def is_token(self, tt: TokenType) -> bool:
		return self.rule is None and self.tok.type is tt

	def is_rule(self, rule: str) -> bool:
		return self.rule == rule

	@property
	def line(self) -> int:
		return self.tok.line

	@property
	def column(self) -> int:
		return self.tok.column

	@property
	def length(self) -> int:
		return self.tok.length

	@property
	def path(self) -> str:
		return self.tok.path

	@property
	def value(self) -> str:
		return self.tok.value

	@property
	def kind_name(self) -> str:
		"""Human-readable node kind (rule name or token type)."""
		return self.rule if self.rule is not None else self.tok.type.value

	def walk(self) -> Iterator["SynTree"]:
		yield self
		for child in self.children:
			yield from child.walk()

	def __repr__(self) -> str:
		if self.rule is None:
			return f"SynTree({self.tok.type.value} {self.tok.value!r} @{self.tok.line}:{self.tok.column})"
		return f"SynTree({self.rule} @{self.tok.line}:{self.tok.column}, {len(self.children)} children)"


def flatten(node: Optional[SynTree], stop_at: Optional[str] = None) -> Optional[SynTree]:
	"""Descend through single-child rule nodes (stopping at rule `stop_at`)."""
	if node is None:
		return None
	# Terminals can carry children too (identifiers embedded in strings); never
	# descend into those.
	while not node.is_terminal and len(node.children) == 1 and (stop_at is None or node.rule != stop_at):
		node = node.children[0]
	return node


def first_token(node: Optional[SynTree]) -> Optional[SynTree]:
	"""Leftmost terminal node of a subtree."""
	if node is None:
		return None
	if node.is_terminal:
		return node
	for child in node.children:
		found = first_token(child)
		if found is not None:
			return found
	return None


def node_at(node: SynTree, line: int, column: int) -> Optional[SynTree]:
	"""
	Deepest node covering (line, column).

	Children are searched first, so a terminal (or an identifier embedded in a
	string literal) wins over the rule nodes that merely borrow its position.
	"""
	for child in node.children:
		if child.line <= line:
			found = node_at(child, line, column)
			if found is not None:
				return found
	if node.line == line and node.column <= column <= node.column + node.length:
		return node
	return None


def dump_tree(node: SynTree, level: int = 0) -> List[str]:
	"""Indented one-line-per-node rendering (`|  ` per nesting level)."""
	if node.is_terminal:
		tok = node.tok
		if tok.type in (TokenType.PUNCT, TokenType.KEYWORD):
			text = tok.value
		else:
			text = f"\"{tok.value}\"" if tok.type is not TokenType.STRING else tok.value
	else:
		text = node.rule or ""
	lines = [f"{'|  ' * level}{text}\t{node.line}:{node.column}"]
	for child in node.children:
		lines.extend(dump_tree(child, level + 1))
	return lines


__all__ = [
	"R_ARRAY_ACCESS",
	"R_ASSIGNMENT",
	"R_ASSIGN_OP",
	"R_BINARY_OP",
	"R_BLOCK",
	"R_CALL",
	"R_CONDITION",
	"R_EXPR",
	"R_EXPR_LIST",
	"R_LIST_LITERAL",
	"R_LVALUE",
	"R_PRIMARY_EXPR",
	"R_SCOPE_ACCESS",
	"R_SCOPE_LITERAL",
	"R_STATEMENT_LIST",
	"R_UNARY_EXPR",
	"R_UNARY_OP",
	"SynTree",
	"dump_tree",
	"first_token",
	"flatten",
	"node_at",
]
