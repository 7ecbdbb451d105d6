# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""structlog setup for gnscope."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
	"""
	Route structlog output to stderr.

	Debug events (one per parsed file, resolved imports) are only emitted with
	`verbose`; otherwise warnings and above pass through so stdout stays
	reserved for command output.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	structlog.configure(
		processors=[
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="%H:%M:%S"),
			structlog.dev.ConsoleRenderer(colors=False),
		],
		wrapper_class=structlog.make_filtering_bound_logger(level),
		context_class=dict,
		logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
		cache_logger_on_first_use=False,
	)


def install_default_logging() -> None:
	"""
	Quiet default for library use: warnings and above to stderr.

	structlog's own default prints every level to stdout. An application that
	configured structlog before importing gnscope keeps its configuration.
	"""
	if not structlog.is_configured():
		configure_logging(verbose=False)


__all__ = ["configure_logging", "install_default_logging"]
