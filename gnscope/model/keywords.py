# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-03-04
"""
Built-in GN names and call classification.

The tables follow `gn help` (variables, functions, target declarations). They
are only used to decide what role a call plays and to tell built-in names
from user names; nothing here evaluates the language.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable

from gnscope.core.symbols import SymbolTable

KNOWN_VARIABLES = (
	# dotfile
	"arg_file_template",
	"buildconfig",
	"check_targets",
	"exec_script_whitelist",
	"root",
	"script_executable",
	"secondary_source",
	"default_args",
	# built-in predefined variables
	"current_cpu",
	"current_os",
	"current_toolchain",
	"default_toolchain",
	"host_cpu",
	"host_os",
	"invoker",
	"python_path",
	"root_build_dir",
	"root_gen_dir",
	"root_out_dir",
	"target_cpu",
	"target_gen_dir",
	"target_name",
	"target_os",
	"target_out_dir",
	# variables set in targets
	"aliased_deps",
	"all_dependent_configs",
	"allow_circular_includes_from",
	"arflags",
	"args",
	"asmflags",
	"assert_no_deps",
	"bundle_contents_dir",
	"bundle_deps_filter",
	"bundle_executable_dir",
	"bundle_resources_dir",
	"bundle_root_dir",
	"cflags",
	"cflags_c",
	"cflags_cc",
	"cflags_objc",
	"cflags_objcc",
	"check_includes",
	"code_signing_args",
	"code_signing_outputs",
	"code_signing_script",
	"code_signing_sources",
	"complete_static_lib",
	"configs",
	"contents",
	"crate_name",
	"crate_root",
	"crate_type",
	"data",
	"data_deps",
	"data_keys",
	"defines",
	"depfile",
	"deps",
	"edition",
	"friend",
	"include_dirs",
	"inputs",
	"ldflags",
	"lib_dirs",
	"libs",
	"metadata",
	"output_conversion",
	"output_dir",
	"output_extension",
	"output_name",
	"output_prefix_override",
	"outputs",
	"partial_info_plist",
	"pool",
	"precompiled_header",
	"precompiled_header_type",
	"precompiled_source",
	"product_type",
	"public",
	"public_configs",
	"public_deps",
	"rebase",
	"response_file_contents",
	"script",
	"sources",
	"testonly",
	"visibility",
	"walk_keys",
	"write_runtime_deps",
	"xcode_extra_attributes",
	"xcode_test_application_name",
	# found in the wild
	"toolchain_args",
)

KNOWN_FUNCTIONS = (
	"assert",
	"declare_args",
	"defined",
	"exec_script",
	"foreach",
	"forward_variables_from",
	"get_label_info",
	"get_path_info",
	"get_target_outputs",
	"getenv",
	"import",
	"not_needed",
	"print",
	"process_file_template",
	"read_file",
	"rebase_path",
	"set_default_toolchain",
	"set_defaults",
	"set_sources_assignment_filter",
	"split_list",
	"string_replace",
	"tool",
	"write_file",
)

NAMED_OBJECTS = (
	"config",
	"pool",
	"template",
	"toolchain",
	# target declarations
	"action",
	"action_foreach",
	"bundle_data",
	"copy",
	"create_bundle",
	"executable",
	"generated_file",
	"group",
	"loadable_module",
	"rust_library",
	"shared_library",
	"source_set",
	"static_library",
	"target",
)

FOREACH = "foreach"
IMPORT = "import"
DECLARE_ARGS = "declare_args"
TARGET = "target"
FILE_KIND = "file"


class CallRole(Enum):
	LOOP = "loop"
	IMPORT = "import"
	NAMED_OBJECT = "named_object"
	BUILTIN_FUNCTION = "builtin_function"


class KeywordRegistry:
	"""
	Per-model registry of built-in names.

	`reset()` re-seeds the sets through the model's symbol table; it runs at
	the start of every analysis, right after the table was cleared.
	"""

	def __init__(self, symbols: SymbolTable) -> None:
		self.symbols = symbols
		self.variables: FrozenSet[str] = frozenset()
		self.functions: FrozenSet[str] = frozenset()
		self.named_objects: FrozenSet[str] = frozenset()
		self.reset()

	def _seed(self, names: Iterable[str]) -> FrozenSet[str]:
		return frozenset(self.symbols.intern(n) for n in names)

	def reset(self) -> None:
		self.variables = self._seed(KNOWN_VARIABLES)
		self.functions = self._seed(KNOWN_FUNCTIONS)
		self.named_objects = self._seed(NAMED_OBJECTS)

	def classify(self, name: str) -> CallRole:
		"""Role of a call to `name`; unknown names are template instantiations."""
		if name == FOREACH:
			return CallRole.LOOP
		if name == IMPORT:
			return CallRole.IMPORT
		if name in self.named_objects or name not in self.functions:
			return CallRole.NAMED_OBJECT
		return CallRole.BUILTIN_FUNCTION

	def is_known_var(self, name: str) -> bool:
		return name in self.variables

	def is_known_obj(self, name: str) -> bool:
		return name in self.functions or name in self.named_objects

	def is_known_id(self, name: str) -> bool:
		return name in self.variables or self.is_known_obj(name)


__all__ = [
	"CallRole",
	"DECLARE_ARGS",
	"FILE_KIND",
	"FOREACH",
	"IMPORT",
	"KNOWN_FUNCTIONS",
	"KNOWN_VARIABLES",
	"KeywordRegistry",
	"NAMED_OBJECTS",
	"TARGET",
]
