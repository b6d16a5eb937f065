# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for parser/transform/driver passes.

Passes never raise for user-facing problems: they append Diagnostic records to
a DiagnosticSink handed to them by the caller. Whether a diagnostic fails the
build is the driver's decision.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Optional diagnostic phase label ("parser", "rsc", ...). Drivers that print
	# JSON fall back to their own phase name when this is unset.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()


class DiagnosticSink:
	"""
	Append-only diagnostic collector shared by one or more module passes.

	Emission is guarded by a lock so passes running on worker threads can share
	a sink. Order across modules is whatever the scheduler produced; order within
	one module follows emission order.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._diagnostics: list[Diagnostic] = []

	def emit(self, diag: Diagnostic) -> None:
		with self._lock:
			self._diagnostics.append(diag)

	def error(
		self,
		message: str,
		span: Optional[Span] = None,
		*,
		code: str | None = None,
		phase: str | None = None,
		notes: Optional[list[str]] = None,
	) -> Diagnostic:
		"""Build and emit an error diagnostic; returns it for callers that want it."""
		diag = Diagnostic(
			message=message,
			code=code,
			phase=phase,
			severity="error",
			span=span or Span(),
			notes=list(notes or []),
		)
		self.emit(diag)
		return diag

	def extend(self, diags: list[Diagnostic]) -> None:
		with self._lock:
			self._diagnostics.extend(diags)

	@property
	def diagnostics(self) -> list[Diagnostic]:
		"""Snapshot of everything emitted so far."""
		with self._lock:
			return list(self._diagnostics)

	def for_file(self, file: str) -> list[Diagnostic]:
		return [d for d in self.diagnostics if d.span.file == file]

	def has_errors(self) -> bool:
		return any(d.severity == "error" for d in self.diagnostics)

	def __len__(self) -> int:
		with self._lock:
			return len(self._diagnostics)

	def __iter__(self) -> Iterator[Diagnostic]:
		return iter(self.diagnostics)


__all__ = ["Diagnostic", "DiagnosticSink"]
