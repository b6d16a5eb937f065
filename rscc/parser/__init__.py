# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
rscc parser package.

`parse_module` raises lark's `UnexpectedInput` on syntax errors (tests rely on
that); `parse_module_file` is the driver-facing wrapper that reports them as
diagnostics instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedInput

from rscc.core.diagnostics import Diagnostic
from rscc.core.span import Span

from . import ast
from .parser import ParsedModule, parse_module
from .visit import VisitMut


def parse_module_file(path: Path | str, *, file: Optional[str] = None) -> Tuple[Optional[ParsedModule], List[Diagnostic]]:
	"""
	Read and parse a module from disk.

	`file` overrides the file name recorded in spans (defaults to `str(path)`).
	Returns `(parsed, diagnostics)`; `parsed` is None when the source did not
	parse.
	"""
	path = Path(path)
	name = file or str(path)
	source = path.read_text(encoding="utf-8")
	try:
		return parse_module(source, file=name), []
	except UnexpectedInput as err:
		span = Span(
			file=name,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
			raw=err,
		)
		return None, [Diagnostic(message=str(err).strip(), phase="parser", severity="error", span=span)]


__all__ = ["ast", "ParsedModule", "VisitMut", "parse_module", "parse_module_file"]
