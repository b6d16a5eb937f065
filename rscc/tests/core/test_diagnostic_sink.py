# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from rscc.core.diagnostics import Diagnostic, DiagnosticSink
from rscc.core.span import Span, format_span_short


def test_diagnostic_normalizes_missing_span():
	diag = Diagnostic(message="boom", span=None)  # type: ignore[arg-type]
	assert isinstance(diag.span, Span)
	assert diag.span.is_dummy


def test_sink_error_builds_and_records_diagnostic():
	sink = DiagnosticSink()
	span = Span(file="a.js", line=3, column=7)
	diag = sink.error("bad import", span, code="X", phase="rsc", notes=["see docs"])

	assert diag.severity == "error"
	assert diag.code == "X"
	assert diag.phase == "rsc"
	assert diag.span is span
	assert diag.notes == ["see docs"]
	assert sink.diagnostics == [diag]
	assert sink.has_errors()
	assert len(sink) == 1


def test_sink_without_errors_reports_clean():
	sink = DiagnosticSink()
	sink.emit(Diagnostic(message="fyi", severity="warning"))
	assert len(sink) == 1
	assert not sink.has_errors()


def test_sink_for_file_filters_by_span_file():
	sink = DiagnosticSink()
	sink.error("one", Span(file="a.js"))
	sink.error("two", Span(file="b.js"))
	sink.error("three", Span(file="a.js"))
	assert [d.message for d in sink.for_file("a.js")] == ["one", "three"]


def test_sink_snapshot_is_a_copy():
	sink = DiagnosticSink()
	snap = sink.diagnostics
	sink.error("later")
	assert snap == []
	assert [d.message for d in sink] == ["later"]


def test_sink_accepts_emission_from_worker_threads():
	sink = DiagnosticSink()

	def _emit(i: int) -> None:
		for j in range(50):
			sink.error(f"{i}:{j}", Span(file=f"m{i}.js"))

	with ThreadPoolExecutor(max_workers=8) as pool:
		list(pool.map(_emit, range(8)))

	assert len(sink) == 400
	for i in range(8):
		# Per-module order follows emission order.
		assert [d.message for d in sink.for_file(f"m{i}.js")] == [f"{i}:{j}" for j in range(50)]


def test_format_span_short_handles_unknown_parts():
	assert format_span_short(Span(file="a.js", line=2, column=5)) == "a.js:2:5"
	assert format_span_short(Span()) == "<unknown>:?:?"
	assert format_span_short(None) == "<unknown location>"
