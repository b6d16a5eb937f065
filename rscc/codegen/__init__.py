# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Source printing for rscc modules."""

from .printer import format_expr, format_item, format_stmt, print_module

__all__ = ["format_expr", "format_item", "format_stmt", "print_module"]
