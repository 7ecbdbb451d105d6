"""
gnscope.core: shared primitives used by the parser and the code model.

Modules:
  - symbols: SymbolTable interner (identity-keyed cross-reference maps)
  - span: source locations
  - diagnostics: Diagnostic + sink protocol + collector
  - logging: structlog configuration (quiet library default, CLI verbosity)
"""

__all__ = [
	"diagnostics",
	"logging",
	"span",
	"symbols",
]
