# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
In-place AST traversal.

`VisitMut.visit(node)` dispatches to `visit_<TypeName>` when a subclass
defines one; otherwise it descends into the node's children. Handlers that
want the default descent call `self.visit_children(node)` themselves.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from .ast import Node


class VisitMut:
	"""Base class for passes that walk (and may mutate) the AST."""

	def visit(self, node: Node) -> None:
		method = getattr(self, f"visit_{type(node).__name__}", None)
		if method is None:
			self.visit_children(node)
			return
		method(node)

	def visit_children(self, node: Node) -> None:
		if not is_dataclass(node):
			return
		for f in fields(node):
			if f.name == "span":
				continue
			value = getattr(node, f.name)
			if isinstance(value, Node):
				self.visit(value)
			elif isinstance(value, list):
				# Iterate a copy: handlers may splice the list they are visiting.
				for item in list(value):
					if isinstance(item, Node):
						self.visit(item)


__all__ = ["VisitMut"]
