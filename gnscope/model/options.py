# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelOptions:
	# Root marker searched in the start directory and its ancestors.
	dotfile_name: str = ".gn"
	# File a `//path:name` label points into.
	build_file_name: str = "BUILD.gn"
	build_file_patterns: tuple[str, ...] = ("*.gn", "*.gni")
	follow_symlinks: bool = False


__all__ = ["ModelOptions"]
