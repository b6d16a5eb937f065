# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
React Server Components module pass.

Per module, in order:

1. collect the directive prologue and the imports (the `"client"` directive
   is removed from the tree);
2. server compilation of a client-boundary module: replace the body with
   the reference proxy and stop (nothing inside the old body is visited);
3. otherwise validate the imports against the compilation's denylists and
   keep walking the module's children.

Violations are reported into the DiagnosticSink handed to the pass; the pass
itself never raises for them.
"""

from __future__ import annotations

import logging
from typing import Optional

from rscc.core.comments import Comments
from rscc.core.diagnostics import DiagnosticSink
from rscc.parser import ast as A
from rscc.parser.visit import VisitMut

from .collector import collect_directives_and_imports
from .config import CompilationMode, Config, config_truthy, resolve_mode
from .rewriter import rewrite_to_module_reference
from .validator import validate_imports

logger = logging.getLogger(__name__)


class ReactServerComponents(VisitMut):
	def __init__(
		self,
		*,
		filepath: str,
		mode: CompilationMode,
		comments: Comments,
		diagnostics: DiagnosticSink,
	) -> None:
		self.filepath = filepath
		self.mode = mode
		self.comments = comments
		self.diagnostics = diagnostics

	@property
	def is_server(self) -> bool:
		return self.mode is CompilationMode.SERVER

	def visit_Module(self, module: A.Module) -> None:
		is_client_boundary, imports = collect_directives_and_imports(module, self.comments)
		if is_client_boundary:
			logger.debug("%s: client boundary directive found", self.filepath)

		if self.is_server and is_client_boundary:
			rewrite_to_module_reference(module, self.filepath, self.comments)
			logger.debug("%s: rewritten to client module reference", self.filepath)
			return

		before = len(self.diagnostics)
		validate_imports(imports, self.mode, self.diagnostics)
		logger.debug(
			"%s: validated %d import(s) for %s compilation, %d diagnostic(s)",
			self.filepath,
			len(imports),
			self.mode.value,
			len(self.diagnostics) - before,
		)
		self.visit_children(module)


def server_components(
	filename: str,
	config: Config,
	comments: Comments,
	diagnostics: DiagnosticSink,
) -> ReactServerComponents:
	"""Build the pass for one module from its file name and configuration."""
	return ReactServerComponents(
		filepath=str(filename),
		mode=resolve_mode(config),
		comments=comments,
		diagnostics=diagnostics,
	)


def transform_module(
	module: A.Module,
	filename: str,
	config: Config,
	*,
	comments: Optional[Comments] = None,
	diagnostics: Optional[DiagnosticSink] = None,
) -> A.Module:
	"""
	Run the pass over `module` in place and return it.

	A disabled configuration (`false`) leaves the module untouched. Callers
	that need the emitted diagnostics or the sentinel comment pass their own
	`diagnostics` sink and `comments` table.
	"""
	if not config_truthy(config):
		logger.debug("%s: pass disabled by config", filename)
		return module
	comments = comments if comments is not None else Comments()
	diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
	server_components(filename, config, comments, diagnostics).visit(module)
	return module


__all__ = ["ReactServerComponents", "server_components", "transform_module"]
