# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-02
"""
gnscope: static browser engine for GN build files.

`gnscope.parser` turns build files into syntax trees, `gnscope.model` builds
the project model (scopes, labels, cross references) on top of them. The CLI
entrypoint is `gnscope.gnscope:main`.

Importing the package installs a quiet structlog default (warnings to stderr)
unless structlog was configured already; `gnscope.core.logging` has the knobs.
"""

from gnscope.core.logging import install_default_logging

install_default_logging()

__all__ = ["core", "model", "parser"]
