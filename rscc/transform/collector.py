# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Directive and import collection.

One forward scan over the module's top-level items that (a) detects the
`"client"` directive in the directive prologue and removes it, and (b)
records every import declaration for validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from rscc.core.comments import Comment, Comments
from rscc.core.span import Span
from rscc.parser import ast as A

from .denylist import CLIENT_DIRECTIVE


@dataclass
class ImportRecord:
	"""
	Summary of one import declaration.

	`source` is `(module specifier, span of the import declaration)`. Each
	specifier is `(name, span)`: the imported name for named imports (the
	left side of `as`), `""` for a default import and `"*"` for a namespace
	import.
	"""

	source: Tuple[str, Span]
	specifiers: List[Tuple[str, Span]] = field(default_factory=list)


def _specifier_entry(spec: A.ImportSpecifier) -> Tuple[str, Span]:
	if isinstance(spec, A.ImportNamedSpecifier):
		if spec.imported is not None:
			imported = spec.imported
			name = imported.value if isinstance(imported, A.Str) else imported.sym
			return name, imported.span
		return spec.local.sym, spec.local.span
	if isinstance(spec, A.ImportDefaultSpecifier):
		return "", spec.span
	return "*", spec.span


def import_record(decl: A.ImportDecl) -> ImportRecord:
	return ImportRecord(
		source=(decl.src.value, decl.span),
		specifiers=[_specifier_entry(s) for s in decl.specifiers],
	)


def _prepend_leading(comments: Comments, pos: int, moved: List[Comment]) -> None:
	for comment in moved + comments.take_leading(pos):
		comments.add_leading(pos, comment)


def collect_directives_and_imports(
	module: A.Module, comments: Optional[Comments] = None
) -> Tuple[bool, List[ImportRecord]]:
	"""
	Scan `module.body` once; return `(is_client_boundary, imports)`.

	While the directive prologue is open, a bare string-literal expression
	statement equal to `"client"` marks the module and is removed; other
	string literals stay and keep the prologue open. Any other item closes the
	prologue. Imports are recorded wherever they appear.

	With `comments`, the comments leading a removed directive move to the next
	kept item (or to the end of the module when none follows).
	"""
	is_client_boundary = False
	in_prologue = True
	imports: List[ImportRecord] = []
	kept: List[A.ModuleItem] = []
	orphaned: List[Comment] = []

	for item in module.body:
		if isinstance(item, A.ImportDecl):
			imports.append(import_record(item))
			in_prologue = False
		elif in_prologue and isinstance(item, A.ExprStmt) and isinstance(item.expr, A.Str):
			if item.expr.value == CLIENT_DIRECTIVE:
				is_client_boundary = True
				# A directive at the module start shares its key with the module's own comments.
				if comments is not None and item.span.lo is not None and item.span.lo != module.span.lo:
					orphaned.extend(comments.take_leading(item.span.lo))
				continue
		else:
			in_prologue = False
		if orphaned and item.span.lo is not None:
			_prepend_leading(comments, item.span.lo, orphaned)
			orphaned = []
		kept.append(item)

	if orphaned:
		end = module.span.hi or 0
		for comment in orphaned + comments.take_trailing(end):
			comments.add_trailing(end, comment)

	module.body[:] = kept
	return is_client_boundary, imports


__all__ = ["ImportRecord", "collect_directives_and_imports", "import_record"]
