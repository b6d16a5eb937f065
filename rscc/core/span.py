# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries best-effort file/line/column info plus the byte offsets `lo`
and `hi` of the node in its source. `lo` doubles as the key of the comment
side table. `Span()` (everything None) is the dummy span given to synthetic
nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus offsets)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	lo: Optional[int] = None
	hi: Optional[int] = None
	raw: Any = None

	@property
	def is_dummy(self) -> bool:
		return self.lo is None and self.line is None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lark token or tree meta.

		If `loc` is already a Span, it is returned unchanged. Lark exposes
		`start_pos`/`end_pos` on both tokens and `Tree.meta`; those become
		`lo`/`hi`. Empty metas (rules that matched nothing) give the dummy span.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		if getattr(loc, "empty", False):
			return cls(file=file)
		return cls(
			file=file or getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			lo=getattr(loc, "start_pos", None),
			hi=getattr(loc, "end_pos", None),
		)

	def to(self, other: "Span") -> "Span":
		"""Span covering `self` through `other` (file taken from `self`)."""
		if self.is_dummy:
			return other
		if other.is_dummy:
			return self
		return Span(
			file=self.file,
			line=self.line,
			column=self.column,
			end_line=other.end_line,
			end_column=other.end_column,
			lo=self.lo,
			hi=other.hi,
		)


DUMMY_SP = Span()


def format_span_short(span: Span | None) -> str:
	"""
	Format a span as `file:line:column`.

	Unknown parts render as `<unknown>` / `?` so the format stays stable for
	notes and human-readable driver output.
	"""
	if span is None:
		return "<unknown location>"
	f = span.file or "<unknown>"
	l = span.line if span.line is not None else "?"
	c = span.column if span.column is not None else "?"
	return f"{f}:{l}:{c}"


__all__ = ["Span", "DUMMY_SP", "format_span_short"]
