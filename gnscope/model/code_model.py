# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-05
"""
Semantic model of a GN project.

`CodeModel.parse_directory()` locates the source root (the directory holding
the dotfile), parses every build file below it and walks each syntax tree:

- files, named objects and built-in function blocks open `Scope`s;
- every variable write/read, call, label string and import is recorded both in
  the enclosing scope and in the project-wide indices;
- imports are parsed on demand and linked into the importing scope;
- `$name`/`${name}` expansions inside strings are parsed as expressions and
  take part in the indices like any other identifier.

The walk never evaluates the language. Bad input is reported into
`diagnostics` and the walk continues with the next statement, so a run always
leaves a (possibly partial) model behind.
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Set

import structlog

from gnscope.core.diagnostics import (
	PHASE_LEXER,
	PHASE_SEMANTICS,
	PHASE_SYNTAX,
	SEVERITY_ERROR,
	SEVERITY_WARNING,
	Diagnostic,
	DiagnosticCollector,
	DiagnosticSink,
)
from gnscope.core.symbols import SymbolTable
from gnscope.parser.ast import (
	R_ARRAY_ACCESS,
	R_ASSIGNMENT,
	R_BLOCK,
	R_CALL,
	R_CONDITION,
	R_EXPR,
	R_EXPR_LIST,
	R_LIST_LITERAL,
	R_PRIMARY_EXPR,
	R_SCOPE_ACCESS,
	R_SCOPE_LITERAL,
	R_UNARY_EXPR,
	SynTree,
	flatten,
	node_at,
)
from gnscope.parser.lexer import Lexer
from gnscope.parser.parser import Parser
from gnscope.parser.tokens import TokenType, unescape

from . import labels
from .interpolation import DollarKind, find_dollars, has_expansion
from .keywords import DECLARE_ARGS, FILE_KIND, TARGET, CallRole, KeywordRegistry
from .options import ModelOptions
from .scope import RefMap, Scope, add_ref

log = structlog.get_logger()


@dataclass
class AnalysisResult:
	"""Outcome of `CodeModel.parse_directory`; `ok` means no errors were reported."""

	ok: bool
	source_root: str
	file_count: int
	error_count: int
	warning_count: int
	diagnostics: List[Diagnostic] = field(default_factory=list)


class _OffsetSink:
	"""Reports diagnostics of a string sub-parse at the string token's position."""

	def __init__(self, target: DiagnosticSink, node: SynTree, pos: int) -> None:
		self.target = target
		self.node = node
		self.pos = pos

	def report(
		self,
		severity: str,
		path: str | None,
		line: int,
		column: int,
		message: str,
		*,
		phase: str | None = None,
		code: str | None = None,
	) -> None:
		tok = self.node.tok
		self.target.report(
			severity,
			tok.path,
			tok.line,
			tok.column + self.pos + max(column, 1) - 1,
			message,
			phase=phase,
			code=code,
		)


def _remap(node: SynTree, string_node: SynTree, pos: int) -> None:
	"""Move a sub-parsed tree onto the coordinates of the string it came from."""
	outer = string_node.tok
	node.tok = replace(node.tok, line=outer.line, column=outer.column + pos + node.tok.column - 1, path=outer.path)
	for child in node.children:
		_remap(child, string_node, pos)


class CodeModel:
	"""
	Project model built from a directory of GN files.

	One instance serves one analysis at a time; `parse_directory` clears and
	rebuilds all state (symbols, registries, files, indices, diagnostics).
	"""

	def __init__(self, options: Optional[ModelOptions] = None, sink: Optional[DiagnosticSink] = None) -> None:
		self.options = options or ModelOptions()
		self.symbols = SymbolTable()
		self.keywords = KeywordRegistry(self.symbols)
		self.diagnostics = DiagnosticCollector(sink)
		self.source_root = ""
		self.files: Dict[str, Scope] = {}
		self._empty_files: Set[str] = set()
		self._reset_indices()

	def _reset_indices(self) -> None:
		self.all_lhs: RefMap = {}
		self.all_rhs: RefMap = {}
		self.all_func_refs: RefMap = {}
		self.all_imports: RefMap = {}
		self.all_object_defs: Dict[str, List[Scope]] = {}
		self.all_unnamed_objects: List[Scope] = []
		self.all_unresolved_imports: List[SynTree] = []
		self.unresolved_dynamic_refs: List[SynTree] = []
		self.declared_args: List[SynTree] = []

	def clear(self) -> None:
		self.diagnostics.clear()
		self.files.clear()
		self._empty_files.clear()
		self.source_root = ""
		self.symbols.clear()
		self.keywords.reset()
		self._reset_indices()

	# ------------------------------------------------------------------
	# Project discovery

	def find_dotfile(self, start: str) -> Optional[str]:
		"""Dotfile in `start` or the nearest ancestor holding one."""
		directory = os.path.abspath(start)
		while True:
			candidate = os.path.join(directory, self.options.dotfile_name)
			if os.path.isfile(candidate):
				return candidate
			parent = os.path.dirname(directory)
			if parent == directory:
				return None
			directory = parent

	def collect_build_files(self, directory: str) -> List[str]:
		"""
		Build files below `directory`: the directory's own files in name order,
		then each subdirectory (in name order) recursively. Hidden entries are
		skipped, and so are symlinked directories unless `follow_symlinks` is set.
		"""
		out: List[str] = []
		self._collect(os.path.abspath(directory), out, set())
		return out

	def _collect(self, directory: str, out: List[str], seen: Set[str]) -> None:
		real = os.path.realpath(directory)
		if real in seen:
			return
		seen.add(real)
		try:
			entries = sorted(os.scandir(directory), key=lambda e: e.name)
		except OSError as err:
			self.diagnostics.report(
				SEVERITY_WARNING, directory, 0, 0, f"cannot read directory: {err.strerror}", phase=PHASE_LEXER, code="W-FILE-OPEN"
			)
			return
		patterns = self.options.build_file_patterns
		subdirs = []
		for entry in entries:
			if entry.name.startswith("."):
				continue
			if entry.is_dir():
				if self.options.follow_symlinks or not entry.is_symlink():
					subdirs.append(entry.path)
			elif entry.is_file() and any(fnmatch.fnmatchcase(entry.name, p) for p in patterns):
				out.append(entry.path)
		for sub in subdirs:
			self._collect(sub, out, seen)

	def parse_directory(self, path: str | os.PathLike) -> AnalysisResult:
		self.clear()
		start = os.path.abspath(os.fspath(path))
		dotfile = self.find_dotfile(start)
		if dotfile is None:
			self.diagnostics.report(
				SEVERITY_ERROR,
				os.path.join(start, self.options.dotfile_name),
				0,
				0,
				"could not find any dotfile in current or super directories",
				phase=PHASE_SEMANTICS,
				code="E-NO-DOTFILE",
			)
			return self._result()
		self.source_root = self.symbols.intern(os.path.dirname(dotfile))
		build_files = self.collect_build_files(self.source_root)
		log.debug("code_model.parse_directory", root=self.source_root, files=len(build_files) + 1)
		for build_file in [dotfile, *build_files]:
			self.parse_file(build_file)
		result = self._result()
		log.debug(
			"code_model.done",
			files=result.file_count,
			errors=result.error_count,
			warnings=result.warning_count,
		)
		return result

	def _result(self) -> AnalysisResult:
		return AnalysisResult(
			ok=self.diagnostics.error_count == 0,
			source_root=self.source_root,
			file_count=len(self.files),
			error_count=self.diagnostics.error_count,
			warning_count=self.diagnostics.warning_count,
			diagnostics=list(self.diagnostics.diagnostics),
		)

	# ------------------------------------------------------------------
	# Files

	def parse_file(self, path: str | os.PathLike) -> Optional[Scope]:
		"""
		Parse and walk one build file; returns its scope.

		Results are memoized by canonical path. The entry is registered before
		the walk starts, so a file reached again through an import cycle yields
		the scope built so far. Returns None for unreadable files and files
		without statements.
		"""
		path_sym = self.symbols.intern(os.path.normpath(os.path.abspath(os.fspath(path))))
		scope = self.files.get(path_sym)
		if scope is not None:
			return scope
		if path_sym in self._empty_files:
			return None
		try:
			text = Path(path_sym).read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as err:
			self.diagnostics.report(
				SEVERITY_WARNING, path_sym, 0, 0, "cannot open file for reading", phase=PHASE_LEXER, code="W-FILE-OPEN"
			)
			log.debug("code_model.file_unreadable", path=path_sym, error=str(err))
			self._empty_files.add(path_sym)
			return None

		lexer = Lexer(self.symbols, sink=self.diagnostics)
		lexer.set_text(text, path_sym)
		tree = Parser(self.diagnostics).parse_statement_list(lexer)
		if tree is None:
			self._empty_files.add(path_sym)
			return None
		scope = Scope(kind=self.symbols.intern(FILE_KIND), name=path_sym, node=tree)
		self.files[path_sym] = scope
		log.debug("code_model.parse_file", path=self.relative_path(path_sym), count=len(self.files))
		self._statement_list(tree, scope)
		return scope

	# ------------------------------------------------------------------
	# Statements

	def _shape_error(self, node: SynTree, where: str) -> None:
		self.diagnostics.error(node, f"unexpected {node.kind_name} in {where}", phase=PHASE_SYNTAX, code="E-SHAPE")

	def _statement_list(self, node: SynTree, scope: Scope) -> None:
		for stmt in node.children:
			if stmt.rule == R_ASSIGNMENT:
				self._assignment(stmt, scope)
			elif stmt.rule == R_CALL:
				self._call(stmt, scope)
			elif stmt.rule == R_CONDITION:
				self._condition(stmt, scope)
			else:
				self._shape_error(stmt, "statement list")

	def _block(self, node: SynTree, scope: Scope) -> None:
		if node.rule != R_BLOCK or len(node.children) != 1:
			self._shape_error(node, "block")
			return
		self._statement_list(node.children[0], scope)

	def _assignment(self, node: SynTree, scope: Scope) -> None:
		if len(node.children) != 3:
			self._shape_error(node, "assignment")
			return
		lvalue, _op, value = node.children
		target = lvalue.children[0] if lvalue.children else lvalue
		if target.is_token(TokenType.IDENT):
			self._var_lhs(target, scope)
		elif target.rule == R_ARRAY_ACCESS and len(target.children) == 2:
			self._var_lhs(target.children[0], scope)
			self._expr(target.children[1], scope)
		elif target.rule == R_SCOPE_ACCESS and len(target.children) == 2:
			# `invoker.name = ...` reads the scope and writes the member
			self._var_rhs(target.children[0], scope)
			self._var_lhs(target.children[1], scope)
		else:
			self._shape_error(target, "assignment target")
			return
		self._expr(value, scope)

	def _condition(self, node: SynTree, scope: Scope) -> None:
		if len(node.children) < 2:
			self._shape_error(node, "condition")
			return
		self._expr(node.children[0], scope)
		self._block(node.children[1], scope)
		if len(node.children) > 2:
			alternative = node.children[2]
			if alternative.rule == R_CONDITION:
				self._condition(alternative, scope)
			else:
				self._block(alternative, scope)

	# ------------------------------------------------------------------
	# Calls

	def _call(self, node: SynTree, scope: Scope) -> None:
		callee = node.children[0] if node.children else None
		if callee is None or not callee.is_token(TokenType.IDENT):
			self._shape_error(node, "call")
			return
		args = next((c for c in node.children[1:] if c.rule == R_EXPR_LIST), None)
		body = node.children[-1] if node.children[-1].rule == R_BLOCK else None
		self._func_ref(callee.value, callee, scope)

		role = self.keywords.classify(callee.value)
		if role is CallRole.LOOP:
			self._foreach(node, args, body, scope)
		elif role is CallRole.IMPORT:
			self._import(node, args, scope)
		elif role is CallRole.NAMED_OBJECT:
			self._named_object(node, callee, args, body, scope)
		else:
			self._builtin(node, callee, args, body, scope)

	def _foreach(self, node: SynTree, args: Optional[SynTree], body: Optional[SynTree], scope: Scope) -> None:
		if args is None or body is None:
			self.diagnostics.error(node, "invalid foreach statement", phase=PHASE_SYNTAX, code="E-FOREACH")
			return
		if len(args.children) != 2:
			self.diagnostics.error(node, "invalid expression list in foreach statement", phase=PHASE_SYNTAX, code="E-FOREACH")
			return
		var = flatten(args.children[0])
		if var is None or not var.is_token(TokenType.IDENT):
			self.diagnostics.error(node, "invalid loop variable in foreach statement", phase=PHASE_SYNTAX, code="E-FOREACH")
		else:
			self._var_lhs(var, scope)
		self._expr(args.children[1], scope)
		# loops do not open a scope
		self._block(body, scope)

	def _import(self, node: SynTree, args: Optional[SynTree], scope: Scope) -> None:
		if args is None or not args.children:
			self.diagnostics.error(node, "invalid import statement", phase=PHASE_SYNTAX, code="E-IMPORT")
			return
		arg = args.children[0]
		ref = flatten(args)
		resolved = False
		if ref is not None and ref.is_token(TokenType.STRING):
			if self._string(ref, scope):
				path = self.resolve_path(ref.tok.unescaped(), ref.path)
				if path:
					path_sym = self.symbols.intern(path)
					add_ref(self.all_imports, path_sym, ref)
					add_ref(scope.import_refs, path_sym, ref)
					if os.path.isfile(path_sym):
						imported = self.parse_file(path_sym)
						if imported is not None:
							resolved = True
							scope.resolved_imports[imported.name] = imported
							log.debug("code_model.import_resolved", importer=self.relative_path(ref.path), path=self.relative_path(path_sym))
					else:
						self.diagnostics.warning(
							ref, f"import file doesn't exist: {path_sym}", phase=PHASE_SEMANTICS, code="W-IMPORT-MISSING"
						)
		else:
			for expr in args.children:
				self._expr(expr, scope)
		if not resolved:
			scope.unresolved_imports.append(arg)
			self.all_unresolved_imports.append(arg)

	def _named_object(
		self,
		node: SynTree,
		callee: SynTree,
		args: Optional[SynTree],
		body: Optional[SynTree],
		scope: Scope,
	) -> None:
		if args is None or not args.children:
			self.diagnostics.error(node, "invalid named object statement", phase=PHASE_SYNTAX, code="E-NAMED-OBJ")
			return
		obj = scope.add_child(callee.value, node)
		params = list(args.children)
		# target("executable", "name") declares its type first
		if callee.value == TARGET and len(params) > 1:
			self._expr(params.pop(0), scope)
		name_arg = params.pop(0)

		name = flatten(name_arg)
		if name is not None and name.is_token(TokenType.STRING):
			obj.params = name
			sym = self.symbols.intern(name.tok.unescaped()) if self._string(name, scope) else ""
			if sym:
				obj.name = sym
				scope.object_defs[sym] = obj
				self.all_object_defs.setdefault(sym, []).append(obj)
			else:
				self.all_unnamed_objects.append(obj)
		else:
			# typically target_name or a string built from it inside templates
			obj.params = name_arg
			self._expr(name_arg, scope)
			self.all_unnamed_objects.append(obj)

		for expr in params:
			self._expr(expr, scope)
		if body is not None:
			self._block(body, obj)

	def _builtin(
		self,
		node: SynTree,
		callee: SynTree,
		args: Optional[SynTree],
		body: Optional[SynTree],
		scope: Scope,
	) -> None:
		if args is not None:
			for expr in args.children:
				self._expr(expr, scope)
		if body is not None:
			block_scope = scope.add_child(callee.value, node)
			block_scope.params = args
			self._block(body, block_scope)

	# ------------------------------------------------------------------
	# Expressions

	def _expr(self, node: SynTree, scope: Scope) -> None:
		if node.rule != R_EXPR:
			self._shape_error(node, "expression")
			return
		for operand in node.children:
			if operand.rule == R_UNARY_EXPR:
				self._unary_expr(operand, scope)

	def _unary_expr(self, node: SynTree, scope: Scope) -> None:
		operand = node.children[-1] if node.children else None
		if operand is None:
			self._shape_error(node, "unary expression")
		elif operand.rule == R_UNARY_EXPR:
			self._unary_expr(operand, scope)
		elif operand.rule == R_PRIMARY_EXPR:
			self._primary_expr(operand, scope)
		else:
			self._shape_error(operand, "unary expression")

	def _primary_expr(self, node: SynTree, scope: Scope) -> None:
		if not node.children:
			self._shape_error(node, "primary expression")
			return
		inner = node.children[0]
		if inner.is_terminal:
			if inner.tok.type is TokenType.IDENT:
				self._var_rhs(inner, scope)
			elif inner.tok.type is TokenType.STRING:
				self._string(inner, scope)
			return
		if inner.rule == R_CALL:
			self._call(inner, scope)
		elif inner.rule == R_ARRAY_ACCESS:
			self._var_rhs(inner.children[0], scope)
			self._expr(inner.children[1], scope)
		elif inner.rule == R_SCOPE_ACCESS:
			self._var_rhs(inner.children[0], scope)
			self._var_rhs(inner.children[1], scope)
		elif inner.rule == R_SCOPE_LITERAL:
			self._block(inner.children[0], scope)
		elif inner.rule == R_EXPR:
			self._expr(inner, scope)
		elif inner.rule == R_LIST_LITERAL:
			for item in inner.children:
				self._expr(item, scope)
		else:
			self._shape_error(inner, "primary expression")

	# ------------------------------------------------------------------
	# Strings

	def _string(self, node: SynTree, scope: Scope) -> bool:
		"""
		Index the expansions and the label of a string literal.

		Returns True when the string has no `$` expansion (hex escapes aside),
		i.e. its value is known without evaluation.
		"""
		tok = node.tok
		static = True
		for dollar in find_dollars(tok.value):
			if dollar.kind is DollarKind.UNTERMINATED:
				self.diagnostics.error(node, "'${' without terminating '}'", phase=PHASE_SYNTAX, code="E-STR-BRACE")
				return False
			if dollar.kind is DollarKind.HEX:
				continue
			static = False
			if dollar.has_name:
				self._string_var(node, scope, dollar.name_pos, dollar.name_length)

		path, name = labels.extract_path_ident(tok.content)
		# names starting with a backslash come from Windows paths ("C:\\...")
		if name and not name.startswith("\\"):
			dynamic = has_expansion(name)
			if not dynamic:
				self._func_ref(self.symbols.intern(unescape(name)), node, scope)
			if dynamic or has_expansion(path):
				self.unresolved_dynamic_refs.append(node)
		return static

	def _string_var(self, node: SynTree, scope: Scope, pos: int, length: int) -> None:
		sink = _OffsetSink(self.diagnostics, node, pos)
		lexer = Lexer(self.symbols, sink=sink)
		lexer.set_text(node.tok.value[pos : pos + length], node.tok.path)
		primary = Parser(sink).parse_primary_expr(lexer)
		if primary is None or not primary.children:
			return
		inner = primary.children[0]
		if not (inner.is_token(TokenType.IDENT) or inner.rule in (R_ARRAY_ACCESS, R_SCOPE_ACCESS)):
			self.diagnostics.error(
				node, f"embedding of {inner.kind_name} in strings not allowed", phase=PHASE_SYNTAX, code="E-STR-EMBED"
			)
			return
		_remap(primary, node, pos)
		self._primary_expr(primary, scope)
		node.children.append(primary.children[0])

	# ------------------------------------------------------------------
	# Recording

	def _var_lhs(self, node: SynTree, scope: Scope) -> None:
		add_ref(scope.lhs, node.value, node)
		add_ref(self.all_lhs, node.value, node)
		if scope.kind == DECLARE_ARGS:
			self.declared_args.append(node)

	def _var_rhs(self, node: SynTree, scope: Scope) -> None:
		add_ref(scope.rhs, node.value, node)
		add_ref(self.all_rhs, node.value, node)

	def _func_ref(self, name: str, node: SynTree, scope: Scope) -> None:
		add_ref(scope.func_refs, name, node)
		add_ref(self.all_func_refs, name, node)

	# ------------------------------------------------------------------
	# Queries

	def file_list(self) -> List[str]:
		return sorted(self.files)

	def get_scope(self, path: str) -> Optional[Scope]:
		"""File scope for `path` (absolute, or relative to the source root)."""
		scope = self.files.get(path)
		if scope is None and path:
			if not os.path.isabs(path) and self.source_root:
				path = os.path.join(self.source_root, path)
			scope = self.files.get(os.path.normpath(os.path.abspath(path)))
		return scope

	def find_node_at(self, path: str, line: int, column: int) -> Optional[SynTree]:
		scope = self.get_scope(path)
		if scope is None or scope.node is None:
			return None
		return node_at(scope.node, line, column)

	def find_from_path(self, label: str, caller_path: str = "") -> Optional[SynTree]:
		"""
		Defining node of a label: the named object's call, or the file's
		statement list when the label has no name. Only files of the last run
		are searched; the model is not modified.
		"""
		if not label:
			return None
		path, name = labels.extract_path_ident(label)
		if not path and not name:
			return None
		file = caller_path
		if path:
			file = self.resolve_path(labels.label_file(path, name, self.options.build_file_name), caller_path)
			if not file:
				return None
		scope = self.get_scope(file)
		if scope is None:
			return None
		if not name:
			return scope.node
		obj = scope.find_object(name)
		return obj.node if obj is not None else None

	def find_definition(self, node: Optional[SynTree]) -> Optional[SynTree]:
		"""
		Definition of a string (label) or identifier node; None when there is
		none or the identifier names more than one object.
		"""
		if node is None or not node.is_terminal:
			return None
		if node.tok.type is TokenType.STRING:
			return self.find_from_path(node.tok.unescaped(), node.path)
		if node.tok.type is TokenType.IDENT:
			defs = self.all_object_defs.get(node.value, [])
			if len(defs) == 1:
				return defs[0].node
		return None

	def relative_path(self, path: str) -> str:
		if not self.source_root or not path:
			return path
		return os.path.relpath(path, self.source_root)

	def resolve_path(self, path: str, referencing_file: str = "") -> str:
		return labels.resolve_path(path, referencing_file, self.source_root)

	def is_known_var(self, name: str) -> bool:
		return self.keywords.is_known_var(name)

	def is_known_obj(self, name: str) -> bool:
		return self.keywords.is_known_obj(name)

	def is_known_id(self, name: str) -> bool:
		return self.keywords.is_known_id(name)


__all__ = ["AnalysisResult", "CodeModel"]
