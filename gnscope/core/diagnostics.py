# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics for the lexer, parser and code model.

Nothing in the analysis raises on bad input: problems are reported into a
sink and the walk continues with the next statement. `DiagnosticCollector` is
the sink used by `CodeModel`; it can forward to another sink (e.g. one owned
by a UI) while keeping its own counts for the "zero errors" verdict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .span import Span

# Diagnostic phases, mirroring the error taxonomy of the analysis.
PHASE_LEXER = "lexer"
PHASE_SYNTAX = "syntax"
PHASE_SEMANTICS = "semantics"

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass
class Diagnostic:
	"""Represents an analysis diagnostic (error/warning)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = SEVERITY_ERROR
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == SEVERITY_ERROR

	def to_dict(self) -> dict:
		return {
			"phase": self.phase,
			"code": self.code,
			"severity": self.severity,
			"message": self.message,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		code = f" [{self.code}]" if self.code else ""
		return f"{self.span.format()}: {self.severity}{code}: {self.message}"


class DiagnosticSink(Protocol):
	"""Abstract error sink: `report(severity, path, line, column, message)`."""

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
		...


class DiagnosticCollector:
	"""Sink that records diagnostics and optionally forwards them."""

	def __init__(self, forward: Optional[DiagnosticSink] = None) -> None:
		self.forward = forward
		self.diagnostics: List[Diagnostic] = []
		self.error_count = 0
		self.warning_count = 0

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
		self.diagnostics.append(
			Diagnostic(
				message=message,
				code=code,
				phase=phase,
				severity=severity,
				span=Span(file=path or None, line=line, column=column),
			)
		)
		if severity == SEVERITY_ERROR:
			self.error_count += 1
		else:
			self.warning_count += 1
		if self.forward is not None:
			self.forward.report(severity, path, line, column, message, phase=phase, code=code)

	def error(self, loc, message: str, *, phase: str, code: str | None = None) -> None:
		"""Report an error at a token/node location."""
		span = Span.from_loc(loc)
		self.report(SEVERITY_ERROR, span.file, span.line or 0, span.column or 0, message, phase=phase, code=code)

	def warning(self, loc, message: str, *, phase: str, code: str | None = None) -> None:
		span = Span.from_loc(loc)
		self.report(SEVERITY_WARNING, span.file, span.line or 0, span.column or 0, message, phase=phase, code=code)

	@property
	def errors(self) -> List[Diagnostic]:
		return [d for d in self.diagnostics if d.is_error]

	@property
	def warnings(self) -> List[Diagnostic]:
		return [d for d in self.diagnostics if not d.is_error]

	def clear(self) -> None:
		self.diagnostics.clear()
		self.error_count = 0
		self.warning_count = 0


__all__ = [
	"Diagnostic",
	"DiagnosticCollector",
	"DiagnosticSink",
	"PHASE_LEXER",
	"PHASE_SEMANTICS",
	"PHASE_SYNTAX",
	"SEVERITY_ERROR",
	"SEVERITY_WARNING",
]
