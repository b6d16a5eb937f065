# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from rscc.codegen import print_module
from rscc.core.comments import Comment, CommentKind, Comments
from rscc.parser import ast as A
from rscc.parser import parse_module
from rscc.transform import rewrite_to_module_reference
from rscc.transform.denylist import CLIENT_ENTRY_SENTINEL, PROXY_MODULE

_SOURCE = """import { useState } from "react"
export default function Counter() {
  const [n] = useState(0)
  return n
}
"""


def _rewrite(filepath: str):
	module = parse_module(_SOURCE, file=filepath).module
	comments = Comments()
	rewrite_to_module_reference(module, filepath, comments)
	return module, comments


def test_rewrite_shape():
	module, _ = _rewrite("app/counter.js")
	assert len(module.body) == 2

	decl, export = module.body
	assert isinstance(decl, A.VarDecl)
	assert decl.kind == "const"
	(declarator,) = decl.decls
	assert isinstance(declarator.name, A.ObjectPat)
	assert [p.key.sym for p in declarator.name.props] == ["createProxy"]
	assert declarator.init.callee.sym == "require"
	assert [a.value for a in declarator.init.args] == [PROXY_MODULE]

	assert isinstance(export, A.ExprStmt)
	assign = export.expr
	assert isinstance(assign, A.AssignExpr)
	assert assign.op == "="
	assert (assign.left.obj.sym, assign.left.prop.sym) == ("module", "exports")
	assert assign.right.callee.sym == "createProxy"
	assert [a.value for a in assign.right.args] == ["app/counter.js"]


def test_rewrite_nodes_carry_dummy_spans():
	module, _ = _rewrite("app/counter.js")
	assert all(item.span.is_dummy for item in module.body)
	assert module.body[1].expr.right.args[0].span.is_dummy


def test_rewrite_adds_sentinel_comment_at_module_start():
	module, comments = _rewrite("app/counter.js")
	assert comments.get_leading(module.span.lo) == [Comment(CommentKind.BLOCK, CLIENT_ENTRY_SENTINEL)]


def test_rewrite_is_deterministic():
	first, first_comments = _rewrite("app/counter.js")
	second, second_comments = _rewrite("app/counter.js")
	assert first.body == second.body
	assert print_module(first, first_comments) == print_module(second, second_comments)


def test_rewrite_prints_proxy_stub():
	module, comments = _rewrite("app/counter.js")
	assert print_module(module, comments) == (
		"/* __next_internal_client_entry_do_not_use__ */\n"
		'const { createProxy } = require("private-next-rsc-mod-ref-proxy");\n'
		'module.exports = createProxy("app/counter.js");\n'
	)


def test_rewrite_output_reparses():
	module, comments = _rewrite("app/counter.js")
	reparsed = parse_module(print_module(module, comments))
	assert [type(i) for i in reparsed.module.body] == [A.VarDecl, A.ExprStmt]
	assert [c.text for c in reparsed.comments.get_leading(0)] == [CLIENT_ENTRY_SENTINEL]


def test_rewrite_escapes_filepath():
	module = A.Module()
	comments = Comments()
	rewrite_to_module_reference(module, 'dir\\we"ird.js', comments)
	assert module.body[1].expr.right.args[0].value == 'dir\\we"ird.js'
	assert 'createProxy("dir\\\\we\\"ird.js")' in print_module(module, comments)
	# Synthetic module without a span still gets the sentinel at position 0.
	assert comments.has_leading(0)
