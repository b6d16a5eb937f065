# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from rscc.codegen import print_module
from rscc.parser import ast as A
from rscc.parser import parse_module
from rscc.transform import collect_directives_and_imports


def _collect(source: str):
	module = parse_module(source, file="m.js").module
	is_boundary, imports = collect_directives_and_imports(module)
	return module, is_boundary, imports


def _str_values(module: A.Module) -> list[str]:
	return [i.expr.value for i in module.body if isinstance(i, A.ExprStmt) and isinstance(i.expr, A.Str)]


def test_client_directive_marks_boundary_and_is_removed():
	module, is_boundary, imports = _collect('"client"\nexport default 1\n')
	assert is_boundary
	assert imports == []
	assert [type(i) for i in module.body] == [A.ExportDefaultExpr]


def test_other_string_literal_is_not_a_boundary_and_is_kept():
	module, is_boundary, _ = _collect('"use client"\nexport default 1\n')
	assert not is_boundary
	assert _str_values(module) == ["use client"]


def test_client_after_other_directive_in_prologue_is_detected():
	module, is_boundary, _ = _collect('"use strict"\n"client"\nconst a = 1\n')
	assert is_boundary
	assert _str_values(module) == ["use strict"]
	assert isinstance(module.body[1], A.VarDecl)


def test_client_after_import_is_not_a_directive():
	module, is_boundary, imports = _collect('import x from "y"; "client";')
	assert not is_boundary
	assert len(imports) == 1
	assert _str_values(module) == ["client"]


def test_client_after_statement_is_not_a_directive():
	module, is_boundary, _ = _collect('const a = 1\n"client"\n')
	assert not is_boundary
	assert _str_values(module) == ["client"]


def test_parenthesized_or_template_client_is_not_a_directive():
	module, is_boundary, _ = _collect('("client")\n"client"\n')
	assert not is_boundary
	assert len(module.body) == 2

	module, is_boundary, _ = _collect('`client`\n"client"\n')
	assert not is_boundary
	assert len(module.body) == 2


def test_export_ends_the_prologue():
	module, is_boundary, _ = _collect('export const a = 1\n"client"\n')
	assert not is_boundary
	assert len(module.body) == 2


def test_every_client_directive_in_the_prologue_is_removed():
	module, is_boundary, _ = _collect('"client"\n"client"\nfoo()\n')
	assert is_boundary
	assert [type(i) for i in module.body] == [A.ExprStmt]
	assert isinstance(module.body[0].expr, A.CallExpr)


def test_empty_module():
	module = A.Module()
	assert collect_directives_and_imports(module) == (False, [])
	assert module.body == []


def test_imports_are_collected_everywhere_with_names_and_spans():
	source = """import React, { useState as useS, "a-b" as ab, useRef } from "react"
const x = 1
import * as dom from "react-dom"
"""
	module, _, imports = _collect(source)
	assert [r.source[0] for r in imports] == ["react", "react-dom"]
	assert imports[0].source[1] == module.body[0].span
	assert imports[1].source[1] == module.body[2].span

	names = [name for name, _ in imports[0].specifiers]
	assert names == ["", "useState", "a-b", "useRef"]
	specs = module.body[0].specifiers
	spans = [span for _, span in imports[0].specifiers]
	assert spans[0] == specs[0].span
	# Aliased specifiers point at the imported name, not the local binding.
	assert spans[1] == specs[1].imported.span
	assert spans[2] == specs[2].imported.span
	assert spans[3] == specs[3].local.span

	assert imports[1].specifiers == [("*", module.body[2].specifiers[0].span)]


def test_items_are_kept_in_order():
	source = '"use strict"\n"client"\nimport a from "a"\nconst b = 1\nexport default b\n'
	module, _, _ = _collect(source)
	assert [type(i) for i in module.body] == [A.ExprStmt, A.ImportDecl, A.VarDecl, A.ExportDefaultExpr]


def test_comments_before_a_later_directive_move_to_the_next_item():
	parsed = parse_module('"use strict"\n// keep me\n"client"\n/* and me */\nfoo()\n', file="m.js")
	module, comments = parsed.module, parsed.comments
	is_boundary, _ = collect_directives_and_imports(module, comments)
	assert is_boundary
	assert _str_values(module) == ["use strict"]
	foo = module.body[1]
	assert [c.text for c in comments.get_leading(foo.span.lo)] == [" keep me", " and me "]
	assert print_module(module, comments) == '"use strict";\n// keep me\n/* and me */\nfoo();\n'


def test_comments_before_a_final_directive_trail_the_module():
	parsed = parse_module('"use strict"\n// keep me\n"client"\n// last\n', file="m.js")
	module, comments = parsed.module, parsed.comments
	collect_directives_and_imports(module, comments)
	assert print_module(module, comments) == '"use strict";\n// keep me\n// last\n'


def test_comment_before_a_leading_directive_stays_first():
	parsed = parse_module('// head\n"client"\nfoo()\n', file="m.js")
	collect_directives_and_imports(parsed.module, parsed.comments)
	assert print_module(parsed.module, parsed.comments) == "// head\nfoo();\n"
