# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from rscc.codegen import print_module
from rscc.core.comments import Comments
from rscc.core.diagnostics import DiagnosticSink
from rscc.parser import ast as A
from rscc.parser import parse_module
from rscc.transform import (
	CompilationMode,
	ConfigAll,
	ConfigWithOptions,
	Options,
	ReactServerComponents,
	server_components,
	transform_module,
)

SERVER = ConfigWithOptions(Options(is_server=True))
CLIENT = ConfigWithOptions(Options(is_server=False))

_CLIENT_COMPONENT = """"client"
import { useState } from "react"
export default function Counter() {
  const [n, setN] = useState(0)
  return n
}
"""


def _run(source: str, config, filepath: str = "components/counter.js"):
	parsed = parse_module(source, file=filepath)
	sink = DiagnosticSink()
	transform_module(parsed.module, filepath, config, comments=parsed.comments, diagnostics=sink)
	return parsed.module, parsed.comments, sink.diagnostics


class _RecordingPass(ReactServerComponents):
	def __init__(self, **kwargs) -> None:
		super().__init__(**kwargs)
		self.functions: list[str] = []

	def visit_FnExpr(self, node: A.FnExpr) -> None:
		self.functions.append(node.ident.sym if node.ident else "<anon>")
		self.visit_children(node)

	def visit_FnDecl(self, node: A.FnDecl) -> None:
		self.functions.append(node.ident.sym)
		self.visit_children(node)


def _recording(source: str, mode: CompilationMode):
	module = parse_module(source).module
	visitor = _RecordingPass(filepath="m.js", mode=mode, comments=Comments(), diagnostics=DiagnosticSink())
	visitor.visit(module)
	return module, visitor


def test_server_compilation_rewrites_client_component():
	module, comments, diags = _run(_CLIENT_COMPONENT, SERVER)
	assert diags == []
	assert print_module(module, comments) == (
		"/* __next_internal_client_entry_do_not_use__ */\n"
		'const { createProxy } = require("private-next-rsc-mod-ref-proxy");\n'
		'module.exports = createProxy("components/counter.js");\n'
	)


def test_client_compilation_strips_directive_and_keeps_module():
	module, comments, diags = _run(_CLIENT_COMPONENT, CLIENT)
	assert diags == []
	assert [type(i) for i in module.body] == [A.ImportDecl, A.ExportDefaultDecl]
	assert comments.leading_positions() == []


def test_client_compilation_keeps_comments_of_a_removed_directive():
	module, comments, diags = _run('"use strict"\n// keep me\n"client"\nfoo()\n', CLIENT)
	assert diags == []
	assert print_module(module, comments) == '"use strict";\n// keep me\nfoo();\n'


def test_server_component_with_client_apis_reports_every_violation():
	source = """import { useState } from "react"
import "client-only"
export default function Page() {
  return useState
}
"""
	module, _, diags = _run(source, SERVER, filepath="app/page.js")
	assert [d.message for d in diags] == [
		"Disallowed React API `useState` in the Server Components compilation.",
		"Disallowed import of `client-only` in the Server Components compilation.",
	]
	assert all(d.span.file == "app/page.js" for d in diags)
	# Validation does not change the module.
	assert [type(i) for i in module.body] == [A.ImportDecl, A.ImportDecl, A.ExportDefaultDecl]


def test_client_component_importing_server_only():
	_, _, diags = _run('"client"\nimport "server-only"\n', CLIENT)
	assert [d.message for d in diags] == ["Disallowed import of `server-only` in the Client Components compilation."]


def test_bare_true_config_means_server_compilation():
	module, _, _ = _run(_CLIENT_COMPONENT, ConfigAll(True))
	assert len(module.body) == 2
	assert isinstance(module.body[0], A.VarDecl)


def test_disabled_config_leaves_module_untouched():
	module, comments, diags = _run(_CLIENT_COMPONENT, ConfigAll(False))
	assert diags == []
	assert isinstance(module.body[0], A.ExprStmt)
	assert module.body[0].expr.value == "client"
	assert comments.leading_positions() == []


def test_rewritten_module_is_not_traversed():
	module, visitor = _recording(_CLIENT_COMPONENT, CompilationMode.SERVER)
	assert visitor.functions == []
	assert len(module.body) == 2


def test_validated_modules_are_traversed():
	source = "export default function Page() {}\nfunction helper() {}\n"
	_, server = _recording(source, CompilationMode.SERVER)
	assert server.functions == ["Page", "helper"]

	_, client = _recording(_CLIENT_COMPONENT, CompilationMode.CLIENT)
	assert client.functions == ["Counter"]


def test_factory_resolves_mode_and_filepath():
	comments = Comments()
	sink = DiagnosticSink()
	visitor = server_components("app/page.js", CLIENT, comments, sink)
	assert visitor.mode is CompilationMode.CLIENT
	assert visitor.filepath == "app/page.js"
	assert visitor.comments is comments
	assert visitor.diagnostics is sink
	assert server_components("a.js", ConfigAll(True), comments, sink).is_server


def test_transform_module_defaults_its_own_sink_and_comments():
	module = parse_module(_CLIENT_COMPONENT).module
	assert transform_module(module, "c.js", SERVER) is module
	assert len(module.body) == 2


def test_parallel_modules_share_one_sink():
	sink = DiagnosticSink()
	sources = {f"m{i}.js": 'import { useState, useRef } from "react"\nimport "client-only"\n' for i in range(16)}

	def _one(name: str) -> None:
		parsed = parse_module(sources[name], file=name)
		transform_module(parsed.module, name, SERVER, comments=parsed.comments, diagnostics=sink)

	with ThreadPoolExecutor(max_workers=4) as pool:
		list(pool.map(_one, sorted(sources)))

	assert len(sink) == 16 * 3
	for name in sources:
		assert [d.message.split("`")[1] for d in sink.for_file(name)] == ["useState", "useRef", "client-only"]


def test_pass_logs_branch_decisions(caplog):
	caplog.set_level(logging.DEBUG, logger="rscc")
	_run(_CLIENT_COMPONENT, SERVER)
	assert "client boundary directive found" in caplog.text
	assert "rewritten to client module reference" in caplog.text

	caplog.clear()
	_run('import "client-only"\n', SERVER)
	assert "validated 1 import(s) for server compilation, 1 diagnostic(s)" in caplog.text
