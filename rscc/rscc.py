# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
rscc command-line driver.

Pipeline per source file:

	parse (lark) -> React Server Components pass -> print

Diagnostics from every module go into one shared DiagnosticSink. With
`--jobs N` the per-module work runs on a thread pool; output order still
follows the command line.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from rscc.codegen import print_module
from rscc.core.diagnostics import Diagnostic, DiagnosticSink
from rscc.core.span import Span, format_span_short
from rscc.parser import parse_module_file
from rscc.transform import (
	Config,
	ConfigError,
	ConfigWithOptions,
	Options,
	load_config,
	transform_module,
)

logger = logging.getLogger(__name__)


def _diag_to_json(diag: Diagnostic, phase: str, source: Optional[Path]) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	file = diag.span.file
	if file is None and source is not None:
		file = str(source)
	return {
		"phase": diag.phase or phase,
		"message": diag.message,
		"severity": diag.severity,
		"code": diag.code,
		"file": file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _report(diags: List[Diagnostic], *, as_json: bool, exit_code: int, source: Optional[Path]) -> None:
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, "rsc", source) for d in diags],
		}
		print(json.dumps(payload))
		return
	for d in diags:
		print(f"{format_span_short(d.span)}: {d.severity}: {d.message}", file=sys.stderr)


def compile_source(path: Path, config: Config, sink: DiagnosticSink) -> Optional[str]:
	"""
	Parse, transform and print one module.

	Returns the printed module, or None when the file could not be read or
	parsed (the reason is emitted into `sink`).
	"""
	try:
		parsed, parse_diags = parse_module_file(path)
	except OSError as err:
		sink.error(f"cannot read source: {err}", Span(file=str(path)), phase="driver")
		return None
	if parsed is None:
		sink.extend(parse_diags)
		return None
	transform_module(parsed.module, str(path), config, comments=parsed.comments, diagnostics=sink)
	return print_module(parsed.module, parsed.comments)


def _resolve_config(args: argparse.Namespace) -> Config:
	if args.config is not None:
		return load_config(args.config)
	return ConfigWithOptions(options=Options(is_server=not args.client))


def _output_paths(sources: List[Path], output: Path) -> List[Path]:
	"""Place each source under `output` at its path relative to the sources' deepest common directory."""
	resolved = [src.resolve() for src in sources]
	common = Path(os.path.commonpath([src.parent for src in resolved]))
	return [output / src.relative_to(common) for src in resolved]


def _write_outputs(sources: List[Path], outputs: List[Optional[str]], output: Optional[Path]) -> None:
	if output is None:
		for text in outputs:
			if text is not None:
				sys.stdout.write(text)
		return
	if len(sources) == 1 and not output.is_dir():
		if outputs[0] is not None:
			output.parent.mkdir(parents=True, exist_ok=True)
			output.write_text(outputs[0], encoding="utf-8")
		return
	for dest, text in zip(_output_paths(sources, output), outputs):
		if text is not None:
			dest.parent.mkdir(parents=True, exist_ok=True)
			dest.write_text(text, encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
	"""
	Transform JavaScript modules for the server or client compilation.

	Exit codes: 0 clean, 1 when any error diagnostic was emitted (no output is
	written in that case), 2 on configuration errors. With --json, diagnostics
	are printed to stdout as `{"exit_code", "diagnostics"}` and transformed
	code is only written to --output.
	"""
	parser = argparse.ArgumentParser(prog="rscc", description="React Server Components module transform")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to JavaScript module(s)")
	mode = parser.add_mutually_exclusive_group()
	mode.add_argument("--server", action="store_true", help="Server compilation (default)")
	mode.add_argument("--client", action="store_true", help="Client compilation")
	mode.add_argument(
		"--config",
		type=Path,
		help='Path to JSON config: `true`/`false` or `{"isServer": bool}`',
	)
	parser.add_argument(
		"-o",
		"--output",
		type=Path,
		help="Output file (single source) or directory; sources keep their layout below their common directory",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/code/file/line/column)",
	)
	parser.add_argument("-j", "--jobs", type=int, default=1, help="Number of modules transformed in parallel")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log pass decisions to stderr")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)

	sources: List[Path] = list(args.source)
	if args.jobs < 1:
		parser.error("--jobs must be at least 1")
	if args.output is not None and len(sources) > 1 and args.output.exists() and not args.output.is_dir():
		parser.error("--output must be a directory when several sources are given")

	try:
		config = _resolve_config(args)
	except ConfigError as err:
		if args.json:
			diag = Diagnostic(message=str(err), phase="config", severity="error")
			_report([diag], as_json=True, exit_code=2, source=args.config)
		else:
			print(f"{args.config}: error: {err}", file=sys.stderr)
		return 2
	logger.debug("config: %r", config)

	sink = DiagnosticSink()
	if args.jobs > 1 and len(sources) > 1:
		with ThreadPoolExecutor(max_workers=args.jobs) as pool:
			outputs = list(pool.map(lambda p: compile_source(p, config, sink), sources))
	else:
		outputs = [compile_source(p, config, sink) for p in sources]

	diags = sink.diagnostics
	exit_code = 1 if sink.has_errors() else 0
	if diags or args.json:
		_report(diags, as_json=args.json, exit_code=exit_code, source=sources[0])
	if exit_code:
		return exit_code
	if args.json and args.output is None:
		return exit_code
	_write_outputs(sources, outputs, args.output)
	return exit_code


if __name__ == "__main__":
	sys.exit(main())
