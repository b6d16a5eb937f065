# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Server Components module pass and its configuration."""

from .collector import ImportRecord, collect_directives_and_imports
from .config import (
	CompilationMode,
	Config,
	ConfigAll,
	ConfigError,
	ConfigWithOptions,
	Options,
	config_from_json,
	config_truthy,
	load_config,
	resolve_mode,
)
from .react_server_components import ReactServerComponents, server_components, transform_module
from .rewriter import rewrite_to_module_reference
from .validator import assert_client_graph, assert_server_graph, validate_imports

__all__ = [
	"CompilationMode",
	"Config",
	"ConfigAll",
	"ConfigError",
	"ConfigWithOptions",
	"ImportRecord",
	"Options",
	"ReactServerComponents",
	"assert_client_graph",
	"assert_server_graph",
	"collect_directives_and_imports",
	"config_from_json",
	"config_truthy",
	"load_config",
	"resolve_mode",
	"rewrite_to_module_reference",
	"server_components",
	"transform_module",
	"validate_imports",
]
