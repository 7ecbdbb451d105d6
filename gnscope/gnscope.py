# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-06
"""
`gnscope` command line.

Subcommands:
  tokens FILE          dump the token stream of one file
  parse PATH           parse a file (or every build file below a directory)
  check DIR            analyze a project and print its diagnostics
  query DIR KIND       run one of the project queries
  xref DIR NAME        list definitions/references of a name or label
  goto DIR FILE L C    show the node at a position and where it is defined

Exit codes: 0 ok, 1 errors were reported, 2 usage error or failed precondition
(unreadable input, no dotfile).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from gnscope.core.diagnostics import DiagnosticCollector
from gnscope.core.logging import configure_logging
from gnscope.model import queries
from gnscope.model.code_model import AnalysisResult, CodeModel
from gnscope.model.options import ModelOptions
from gnscope.parser import Lexer, Parser, dump_tree
from gnscope.parser.tokens import TokenType

log = structlog.get_logger()

QUERY_KINDS = (
	"unresolved-imports",
	"unnamed-objects",
	"lhs-only",
	"rhs-only",
	"dynamic-refs",
	"declared-args",
)


def _add_model_flags(p: argparse.ArgumentParser) -> None:
	p.add_argument("--dotfile", default=None, help="Name of the project root marker (default: .gn)")
	p.add_argument("--build-file", default=None, help="Build file a 'path:name' label points into (default: BUILD.gn)")


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="gnscope", description="Static browser for GN build files")
	p.add_argument("-v", "--verbose", action="store_true", help="Log analysis progress to stderr")
	sub = p.add_subparsers(dest="cmd", required=True)

	tokens = sub.add_parser("tokens", help="Dump the tokens of a build file")
	tokens.add_argument("file", type=Path, help="Path to a .gn/.gni file")
	tokens.add_argument("--comments", action="store_true", help="Include comment tokens")

	parse = sub.add_parser("parse", help="Parse a build file or every build file below a directory")
	parse.add_argument("path", type=Path, help="File or directory")
	parse.add_argument("--dump", action="store_true", help="Print the syntax tree of each file")

	check = sub.add_parser("check", help="Analyze a project and report diagnostics")
	check.add_argument("dir", type=Path, help="Project directory (or any directory below the source root)")
	check.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	_add_model_flags(check)

	query = sub.add_parser("query", help="Run a project query")
	query.add_argument("dir", type=Path, help="Project directory")
	query.add_argument("kind", choices=QUERY_KINDS, help="Query to run")
	query.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	_add_model_flags(query)

	xref = sub.add_parser("xref", help="Cross-reference an identifier or label")
	xref.add_argument("dir", type=Path, help="Project directory")
	xref.add_argument("name", help="Identifier or label, e.g. 'sources' or '//base:base'")
	xref.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	_add_model_flags(xref)

	goto = sub.add_parser("goto", help="Find the definition of the symbol at a source position")
	goto.add_argument("dir", type=Path, help="Project directory")
	goto.add_argument("file", help="Build file (absolute, or relative to the source root)")
	goto.add_argument("line", type=int, help="1-based line")
	goto.add_argument("column", type=int, help="1-based column")
	_add_model_flags(goto)
	return p


def _model_options(args: argparse.Namespace) -> ModelOptions:
	defaults = ModelOptions()
	return ModelOptions(
		dotfile_name=args.dotfile or defaults.dotfile_name,
		build_file_name=args.build_file or defaults.build_file_name,
	)


def _print_diagnostics(collector: DiagnosticCollector) -> None:
	for diag in collector.diagnostics:
		print(diag.format_human(), file=sys.stderr)


def _read(path: Path) -> Optional[str]:
	try:
		return path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		print(f"{path}:?:?: error: cannot open file for reading ({err})", file=sys.stderr)
		return None


def _cmd_tokens(args: argparse.Namespace) -> int:
	text = _read(args.file)
	if text is None:
		return 2
	collector = DiagnosticCollector()
	lexer = Lexer(sink=collector, ignore_comments=not args.comments)
	for tok in lexer.tokens(text, str(args.file)):
		print(f"{tok.type.name} {tok.line} {tok.column} {tok.value}")
	_print_diagnostics(collector)
	return 1 if collector.error_count else 0


def _cmd_parse(args: argparse.Namespace) -> int:
	path: Path = args.path
	if path.is_dir():
		files = CodeModel().collect_build_files(str(path))
	else:
		files = [str(path)]
	status = 0
	for file in files:
		text = _read(Path(file))
		if text is None:
			status = max(status, 2)
			continue
		collector = DiagnosticCollector()
		lexer = Lexer(sink=collector)
		lexer.set_text(text, file)
		tree = Parser(collector).parse_statement_list(lexer)
		_print_diagnostics(collector)
		print(f"{'OK' if collector.error_count == 0 else 'FAILED'} {file}")
		if collector.error_count:
			status = max(status, 1)
		if args.dump and tree is not None:
			print("\n".join(dump_tree(tree)))
	return status


def _analyze(args: argparse.Namespace) -> tuple[CodeModel, AnalysisResult]:
	model = CodeModel(_model_options(args))
	result = model.parse_directory(args.dir)
	return model, result


def _exit_code(result: AnalysisResult) -> int:
	if not result.source_root:
		return 2
	return 0 if result.ok else 1


def _cmd_check(args: argparse.Namespace) -> int:
	model, result = _analyze(args)
	code = _exit_code(result)
	if args.json:
		payload = {
			"exit_code": code,
			"source_root": result.source_root,
			"files": [model.relative_path(f) for f in model.file_list()],
			"diagnostics": [d.to_dict() for d in result.diagnostics],
		}
		print(json.dumps(payload, sort_keys=True))
		return code
	_print_diagnostics(model.diagnostics)
	if result.source_root:
		print(f"{result.file_count} files, {result.error_count} errors, {result.warning_count} warnings")
	return code


def _cmd_query(args: argparse.Namespace) -> int:
	model, result = _analyze(args)
	if not result.source_root:
		_print_diagnostics(model.diagnostics)
		return 2
	kind = args.kind
	names: List[str] = []
	locations: List[queries.Location] = []
	if kind == "unresolved-imports":
		locations = queries.unresolved_imports(model)
	elif kind == "unnamed-objects":
		locations = queries.unnamed_objects(model)
	elif kind == "dynamic-refs":
		locations = queries.dynamic_refs(model)
	elif kind == "lhs-only":
		names = queries.lhs_only(model)
	elif kind == "rhs-only":
		names = queries.rhs_only(model)
	else:
		names = queries.declared_arg_names(model)

	if args.json:
		items = [loc.to_dict() for loc in locations] if locations else [
			{"name": n, "builtin": model.is_known_var(n)} for n in names
		]
		print(json.dumps({"query": kind, "results": items}, sort_keys=True))
		return 0
	for loc in locations:
		print(loc.format())
	for name in names:
		print(f"{name} (built-in)" if model.is_known_var(name) else name)
	return 0


def _cmd_xref(args: argparse.Namespace) -> int:
	model, result = _analyze(args)
	if not result.source_root:
		_print_diagnostics(model.diagnostics)
		return 2
	refs = queries.xrefs(model, args.name)
	if args.json:
		print(json.dumps({"name": args.name, "xrefs": [r.to_dict() for r in refs]}, sort_keys=True))
		return 0
	for ref in refs:
		print(ref.format())
	return 0


def _cmd_goto(args: argparse.Namespace) -> int:
	model, result = _analyze(args)
	if not result.source_root:
		_print_diagnostics(model.diagnostics)
		return 2
	node = model.find_node_at(args.file, args.line, args.column)
	if node is None:
		print(f"{args.file}:{args.line}:{args.column}: nothing here", file=sys.stderr)
		return 1
	here = queries.Location.of(model, node)
	label = node.value if node.is_terminal and node.tok.type is not TokenType.EOF else node.kind_name
	print(f"{here.format()}: {node.kind_name} {label}")
	target = model.find_definition(node)
	if target is None:
		print("no definition found")
		return 1
	print(f"definition: {queries.Location.of(model, target).format()}")
	return 0


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)
	configure_logging(args.verbose)
	log.debug("gnscope.start", cmd=args.cmd)

	if args.cmd == "tokens":
		return _cmd_tokens(args)
	if args.cmd == "parse":
		return _cmd_parse(args)
	if args.cmd == "check":
		return _cmd_check(args)
	if args.cmd == "query":
		return _cmd_query(args)
	if args.cmd == "xref":
		return _cmd_xref(args)
	if args.cmd == "goto":
		return _cmd_goto(args)
	p.error(f"unknown command {args.cmd}")
	return 2


if __name__ == "__main__":
	sys.exit(main())
