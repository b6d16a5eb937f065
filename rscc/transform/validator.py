# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Import graph validation.

Checks the imports of one module against the denylists for the active
compilation. Every violation becomes an error diagnostic; nothing
short-circuits, so a module reports all of its violations in source order.
"""

from __future__ import annotations

from typing import Iterable

from rscc.core.diagnostics import DiagnosticSink

from .collector import ImportRecord
from .config import CompilationMode
from .denylist import (
	CLIENT_DISALLOWED_SOURCES,
	SERVER_DISALLOWED_REACT_APIS,
	SERVER_DISALLOWED_REACT_DOM_APIS,
	SERVER_DISALLOWED_SOURCES,
)

PHASE = "rsc"
CODE_DISALLOWED_IMPORT = "RSC_DISALLOWED_IMPORT"
CODE_DISALLOWED_API = "RSC_DISALLOWED_API"


def assert_server_graph(imports: Iterable[ImportRecord], diagnostics: DiagnosticSink) -> None:
	for record in imports:
		source, source_span = record.source
		if source in SERVER_DISALLOWED_SOURCES:
			diagnostics.error(
				f"Disallowed import of `{source}` in the Server Components compilation.",
				source_span,
				code=CODE_DISALLOWED_IMPORT,
				phase=PHASE,
			)
		if source == "react":
			for name, span in record.specifiers:
				if name in SERVER_DISALLOWED_REACT_APIS:
					diagnostics.error(
						f"Disallowed React API `{name}` in the Server Components compilation.",
						span,
						code=CODE_DISALLOWED_API,
						phase=PHASE,
					)
		if source == "react-dom":
			for name, span in record.specifiers:
				if name in SERVER_DISALLOWED_REACT_DOM_APIS:
					diagnostics.error(
						f"Disallowed ReactDOM API `{name}` in the Server Components compilation.",
						span,
						code=CODE_DISALLOWED_API,
						phase=PHASE,
					)


def assert_client_graph(imports: Iterable[ImportRecord], diagnostics: DiagnosticSink) -> None:
	for record in imports:
		source, source_span = record.source
		if source in CLIENT_DISALLOWED_SOURCES:
			diagnostics.error(
				f"Disallowed import of `{source}` in the Client Components compilation.",
				source_span,
				code=CODE_DISALLOWED_IMPORT,
				phase=PHASE,
			)


def validate_imports(imports: Iterable[ImportRecord], mode: CompilationMode, diagnostics: DiagnosticSink) -> None:
	if mode is CompilationMode.SERVER:
		assert_server_graph(imports, diagnostics)
	else:
		assert_client_graph(imports, diagnostics)


__all__ = [
	"CODE_DISALLOWED_API",
	"CODE_DISALLOWED_IMPORT",
	"PHASE",
	"assert_client_graph",
	"assert_server_graph",
	"validate_imports",
]
