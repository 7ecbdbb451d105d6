"""
GN project model: scopes, label resolution and cross-reference indices.

`CodeModel` is the entry point; `queries` answers the browser-style questions
(unresolved imports, write-only variables, cross references) on top of it.
"""

from .code_model import AnalysisResult, CodeModel
from .keywords import CallRole, KeywordRegistry
from .labels import extract_path_ident, label_file, looks_like_implicit_name_path, resolve_path
from .options import ModelOptions
from .scope import Scope

__all__ = [
	"AnalysisResult",
	"CallRole",
	"CodeModel",
	"KeywordRegistry",
	"ModelOptions",
	"Scope",
	"extract_path_ident",
	"label_file",
	"looks_like_implicit_name_path",
	"resolve_path",
]
