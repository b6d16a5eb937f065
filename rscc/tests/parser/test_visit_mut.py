# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from rscc.parser import VisitMut, parse_module
from rscc.parser import ast as A


class _IdentCollector(VisitMut):
	def __init__(self) -> None:
		self.names: list[str] = []

	def visit_Ident(self, node: A.Ident) -> None:
		self.names.append(node.sym)


def test_default_traversal_reaches_nested_nodes():
	module = parse_module("function f(a) {\n  return g(a, b.c)\n}\n").module
	collector = _IdentCollector()
	collector.visit(module)
	assert collector.names == ["f", "a", "g", "a", "b", "c"]


def test_handler_controls_descent():
	class _SkipFunctions(_IdentCollector):
		def visit_FnDecl(self, node: A.FnDecl) -> None:
			self.names.append(f"fn:{node.ident.sym}")

	module = parse_module("function f(a) { return a }\nx\n").module
	collector = _SkipFunctions()
	collector.visit(module)
	assert collector.names == ["fn:f", "x"]


def test_handlers_may_remove_items_while_visiting():
	class _DropExprStmts(VisitMut):
		def __init__(self, body: list) -> None:
			self.body = body
			self.seen = 0

		def visit_ExprStmt(self, node: A.ExprStmt) -> None:
			self.seen += 1
			self.body.remove(node)

	module = parse_module("a\nb\nconst c = 1\nd\n").module
	visitor = _DropExprStmts(module.body)
	visitor.visit(module)
	assert visitor.seen == 3
	assert [type(i) for i in module.body] == [A.VarDecl]
