# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST -> JavaScript source printer.

Output is deterministic and reparsable by rscc's own parser: one top-level item
per line, two-space indentation, explicit semicolons. Parentheses come from
`ParenExpr` nodes, so no precedence analysis is done here.
"""

from __future__ import annotations

import json
from typing import List, Optional

from rscc.core.comments import Comments
from rscc.parser import ast as A

_INDENT = "  "
_WORD_UNARY = {"typeof", "void", "delete"}


def _pad(depth: int) -> str:
	return _INDENT * depth


def format_str(node: A.Str) -> str:
	if node.raw is not None:
		return node.raw
	return json.dumps(node.value, ensure_ascii=False)


def format_num(node: A.Num) -> str:
	if node.raw is not None:
		return node.raw
	if float(node.value).is_integer():
		return str(int(node.value))
	return repr(node.value)


def format_prop_name(key: A.PropName, depth: int = 0) -> str:
	if isinstance(key, A.Ident):
		return key.sym
	if isinstance(key, A.Str):
		return format_str(key)
	if isinstance(key, A.Num):
		return format_num(key)
	if isinstance(key, A.ComputedPropName):
		return f"[{format_expr(key.expr, depth)}]"
	return "<invalid key>"


def format_params(params: List[A.Pat], depth: int) -> str:
	return "(" + ", ".join(format_pat(p, depth) for p in params) + ")"


def format_function_tail(function: A.Function, depth: int) -> str:
	"""`(params) { body }`, shared by declarations, expressions and methods."""
	return f"{format_params(function.params, depth)} {format_block(function.body, depth)}"


def format_method(key: A.PropName, function: A.Function, kind: str, depth: int, *, is_static: bool = False) -> str:
	prefix = "static " if is_static else ""
	if kind in ("get", "set"):
		prefix += f"{kind} "
	if function.is_async:
		prefix += "async "
	if function.is_generator:
		prefix += "*"
	return prefix + format_prop_name(key, depth) + format_function_tail(function, depth)


def format_class(name: Optional[A.Ident], class_: A.Class, depth: int) -> str:
	head = "class"
	if name is not None:
		head += f" {name.sym}"
	if class_.super_class is not None:
		head += f" extends {format_expr(class_.super_class, depth)}"
	if not class_.body:
		return head + " {}"
	lines = [head + " {"]
	for member in class_.body:
		lines.append(_pad(depth + 1) + format_class_member(member, depth + 1))
	lines.append(_pad(depth) + "}")
	return "\n".join(lines)


def format_class_member(member: A.ClassMember, depth: int) -> str:
	if isinstance(member, A.ClassMethod):
		kind = "method" if member.kind == "constructor" else member.kind
		return format_method(member.key, member.function, kind, depth, is_static=member.is_static)
	if isinstance(member, A.ClassProp):
		text = ("static " if member.is_static else "") + format_prop_name(member.key, depth)
		if member.value is not None:
			text += f" = {format_expr(member.value, depth)}"
		return text + ";"
	return "<invalid member>"


def format_prop(prop: A.Prop, depth: int) -> str:
	if isinstance(prop, A.KeyValueProp):
		return f"{format_prop_name(prop.key, depth)}: {format_expr(prop.value, depth)}"
	if isinstance(prop, A.ShorthandProp):
		return prop.ident.sym
	if isinstance(prop, A.MethodProp):
		return format_method(prop.key, prop.function, prop.kind, depth)
	if isinstance(prop, A.SpreadElement):
		return f"...{format_expr(prop.expr, depth)}"
	return "<invalid prop>"


def format_pat(pat: A.Pat, depth: int = 0) -> str:
	if isinstance(pat, A.Ident):
		return pat.sym
	if isinstance(pat, A.ObjectPat):
		if not pat.props:
			return "{}"
		return "{ " + ", ".join(format_pat_prop(p, depth) for p in pat.props) + " }"
	if isinstance(pat, A.ArrayPat):
		return "[" + ", ".join("" if e is None else format_pat(e, depth) for e in pat.elems) + "]"
	if isinstance(pat, A.AssignPat):
		return f"{format_pat(pat.left, depth)} = {format_expr(pat.right, depth)}"
	if isinstance(pat, A.RestPat):
		return f"...{format_pat(pat.arg, depth)}"
	return "<invalid pattern>"


def format_pat_prop(prop, depth: int) -> str:
	if isinstance(prop, A.AssignPatProp):
		if prop.value is None:
			return prop.key.sym
		return f"{prop.key.sym} = {format_expr(prop.value, depth)}"
	if isinstance(prop, A.KeyValuePatProp):
		return f"{format_prop_name(prop.key, depth)}: {format_pat(prop.value, depth)}"
	return format_pat(prop, depth)


def format_args(args: List, depth: int) -> str:
	return "(" + ", ".join(format_expr(a, depth) for a in args) + ")"


def format_tpl(tpl: A.Tpl, depth: int) -> str:
	parts = ["`", tpl.quasis[0]]
	for expr, quasi in zip(tpl.exprs, tpl.quasis[1:]):
		parts.append("${" + format_expr(expr, depth) + "}" + quasi)
	parts.append("`")
	return "".join(parts)


def format_jsx_name(name) -> str:
	if isinstance(name, A.JSXNamespacedName):
		return f"{name.ns}:{name.name}"
	return ".".join(name.parts)


def format_jsx_attr(attr, depth: int) -> str:
	if isinstance(attr, A.JSXSpreadAttr):
		return "{..." + format_expr(attr.expr, depth) + "}"
	if attr.value is None:
		return attr.name
	if isinstance(attr.value, A.Str):
		# JSX attribute strings have no escapes; print them as written.
		return f"{attr.name}={attr.value.raw}"
	return f"{attr.name}={format_jsx_child(attr.value, depth)}"


def format_jsx_child(child, depth: int) -> str:
	"""Child text is printed raw, so line breaks inside elements are the source's own."""
	if isinstance(child, A.JSXText):
		return child.raw
	if isinstance(child, A.JSXExprContainer):
		return "{" + ("" if child.expr is None else format_expr(child.expr, depth)) + "}"
	if isinstance(child, A.JSXSpreadChild):
		return "{..." + format_expr(child.expr, depth) + "}"
	return format_jsx(child, depth)


def format_jsx(node, depth: int) -> str:
	children = "".join(format_jsx_child(c, depth) for c in node.children)
	if isinstance(node, A.JSXFragment):
		return f"<>{children}</>"
	name = format_jsx_name(node.name)
	head = " ".join([name] + [format_jsx_attr(a, depth) for a in node.attrs])
	if node.self_closing:
		return f"<{head} />"
	return f"<{head}>{children}</{name}>"


def format_expr(expr, depth: int = 0) -> str:
	if isinstance(expr, A.Ident):
		return expr.sym
	if isinstance(expr, A.Str):
		return format_str(expr)
	if isinstance(expr, A.Num):
		return format_num(expr)
	if isinstance(expr, A.Bool):
		return "true" if expr.value else "false"
	if isinstance(expr, A.Null):
		return "null"
	if isinstance(expr, A.Tpl):
		return format_tpl(expr, depth)
	if isinstance(expr, A.TaggedTpl):
		return format_expr(expr.tag, depth) + format_tpl(expr.tpl, depth)
	if isinstance(expr, A.Regex):
		return f"/{expr.pattern}/{expr.flags}"
	if isinstance(expr, A.Import):
		return "import"
	if isinstance(expr, (A.JSXElement, A.JSXFragment)):
		return format_jsx(expr, depth)
	if isinstance(expr, A.ThisExpr):
		return "this"
	if isinstance(expr, A.SuperExpr):
		return "super"
	if isinstance(expr, A.SpreadElement):
		return f"...{format_expr(expr.expr, depth)}"
	if isinstance(expr, A.ArrayLit):
		return "[" + ", ".join("" if e is None else format_expr(e, depth) for e in expr.elems) + "]"
	if isinstance(expr, A.ObjectLit):
		if not expr.props:
			return "{}"
		return "{ " + ", ".join(format_prop(p, depth) for p in expr.props) + " }"
	if isinstance(expr, A.ParenExpr):
		return f"({format_expr(expr.expr, depth)})"
	if isinstance(expr, A.FnExpr):
		head = "async function" if expr.function.is_async else "function"
		if expr.function.is_generator:
			head += "*"
		if expr.ident is not None:
			head += f" {expr.ident.sym}"
		return head + format_function_tail(expr.function, depth)
	if isinstance(expr, A.ArrowExpr):
		params = format_params(expr.params, depth)
		if isinstance(expr.body, A.BlockStmt):
			body = format_block(expr.body, depth)
		elif isinstance(expr.body, A.ObjectLit):
			body = f"({format_expr(expr.body, depth)})"
		else:
			body = format_expr(expr.body, depth)
		return ("async " if expr.is_async else "") + f"{params} => {body}"
	if isinstance(expr, A.ClassExpr):
		return format_class(expr.ident, expr.class_, depth)
	if isinstance(expr, A.MemberExpr):
		obj = format_expr(expr.obj, depth)
		if isinstance(expr.prop, A.ComputedPropName):
			return f"{obj}[{format_expr(expr.prop.expr, depth)}]"
		return f"{obj}.{expr.prop.sym}"
	if isinstance(expr, A.CallExpr):
		return format_expr(expr.callee, depth) + format_args(expr.args, depth)
	if isinstance(expr, A.NewExpr):
		text = f"new {format_expr(expr.callee, depth)}"
		if expr.args is not None:
			text += format_args(expr.args, depth)
		return text
	if isinstance(expr, A.UnaryExpr):
		arg = format_expr(expr.arg, depth)
		if expr.op in _WORD_UNARY or arg.startswith(expr.op):
			return f"{expr.op} {arg}"
		return f"{expr.op}{arg}"
	if isinstance(expr, A.AwaitExpr):
		return f"await {format_expr(expr.arg, depth)}"
	if isinstance(expr, A.BinExpr):
		return f"{format_expr(expr.left, depth)} {expr.op} {format_expr(expr.right, depth)}"
	if isinstance(expr, A.CondExpr):
		return f"{format_expr(expr.test, depth)} ? {format_expr(expr.cons, depth)} : {format_expr(expr.alt, depth)}"
	if isinstance(expr, A.AssignExpr):
		left = format_pat(expr.left, depth) if isinstance(expr.left, A.Pat) else format_expr(expr.left, depth)
		return f"{left} {expr.op} {format_expr(expr.right, depth)}"
	return "<invalid expr>"


def format_block(block: A.BlockStmt, depth: int) -> str:
	if not block.stmts:
		return "{}"
	lines = ["{"]
	for stmt in block.stmts:
		lines.append(_pad(depth + 1) + format_stmt(stmt, depth + 1))
	lines.append(_pad(depth) + "}")
	return "\n".join(lines)


def format_var_decl(decl: A.VarDecl, depth: int) -> str:
	parts = []
	for d in decl.decls:
		text = format_pat(d.name, depth)
		if d.init is not None:
			text += f" = {format_expr(d.init, depth)}"
		parts.append(text)
	return f"{decl.kind} {', '.join(parts)};"


def format_stmt(stmt: A.Stmt, depth: int = 0) -> str:
	if isinstance(stmt, A.ExprStmt):
		# Statement position would read these as declarations or blocks.
		if isinstance(stmt.expr, (A.ObjectLit, A.FnExpr, A.ClassExpr)):
			return f"({format_expr(stmt.expr, depth)});"
		return f"{format_expr(stmt.expr, depth)};"
	if isinstance(stmt, A.BlockStmt):
		return format_block(stmt, depth)
	if isinstance(stmt, A.EmptyStmt):
		return ";"
	if isinstance(stmt, A.VarDecl):
		return format_var_decl(stmt, depth)
	if isinstance(stmt, A.FnDecl):
		head = "async function" if stmt.function.is_async else "function"
		if stmt.function.is_generator:
			head += "*"
		return f"{head} {stmt.ident.sym}" + format_function_tail(stmt.function, depth)
	if isinstance(stmt, A.ClassDecl):
		return format_class(stmt.ident, stmt.class_, depth)
	if isinstance(stmt, A.ReturnStmt):
		if stmt.arg is None:
			return "return;"
		return f"return {format_expr(stmt.arg, depth)};"
	if isinstance(stmt, A.ThrowStmt):
		return f"throw {format_expr(stmt.arg, depth)};"
	if isinstance(stmt, A.IfStmt):
		text = f"if ({format_expr(stmt.test, depth)}) {format_stmt(stmt.cons, depth)}"
		if stmt.alt is not None:
			text += f" else {format_stmt(stmt.alt, depth)}"
		return text
	if isinstance(stmt, A.WhileStmt):
		return f"while ({format_expr(stmt.test, depth)}) {format_stmt(stmt.body, depth)}"
	return "<invalid stmt>"


def format_export_name(name: A.ModuleExportName) -> str:
	if isinstance(name, A.Str):
		return format_str(name)
	return name.sym


def format_import(decl: A.ImportDecl) -> str:
	src = format_str(decl.src)
	if not decl.specifiers:
		return f"import {src};"
	parts: List[str] = []
	named: List[str] = []
	for spec in decl.specifiers:
		if isinstance(spec, A.ImportDefaultSpecifier):
			parts.append(spec.local.sym)
		elif isinstance(spec, A.ImportStarAsSpecifier):
			parts.append(f"* as {spec.local.sym}")
		elif spec.imported is not None:
			named.append(f"{format_export_name(spec.imported)} as {spec.local.sym}")
		else:
			named.append(spec.local.sym)
	if named:
		parts.append("{ " + ", ".join(named) + " }")
	return f"import {', '.join(parts)} from {src};"


def format_item(item: A.ModuleItem, depth: int = 0) -> str:
	if isinstance(item, A.ImportDecl):
		return format_import(item)
	if isinstance(item, A.ExportDecl):
		return f"export {format_stmt(item.decl, depth)}"
	if isinstance(item, A.ExportDefaultDecl):
		return f"export default {format_expr(item.decl, depth)}"
	if isinstance(item, A.ExportDefaultExpr):
		return f"export default {format_expr(item.expr, depth)};"
	if isinstance(item, A.NamedExport):
		specs = []
		for spec in item.specifiers:
			text = format_export_name(spec.orig)
			if spec.exported is not None:
				text += f" as {format_export_name(spec.exported)}"
			specs.append(text)
		text = "export { " + ", ".join(specs) + " }" if specs else "export {}"
		if item.src is not None:
			text += f" from {format_str(item.src)}"
		return text + ";"
	if isinstance(item, A.ExportAll):
		text = "export *"
		if item.alias is not None:
			text += f" as {format_export_name(item.alias)}"
		return f"{text} from {format_str(item.src)};"
	return format_stmt(item, depth)


def print_module(module: A.Module, comments: Optional[Comments] = None) -> str:
	"""Render `module` (with comments from the side table, if given) as source text."""
	lines: List[str] = []
	module_lo = module.span.lo if module.span.lo is not None else 0
	if comments is not None:
		lines.extend(c.render() for c in comments.get_leading(module_lo))
	for item in module.body:
		if comments is not None and item.span.lo is not None and item.span.lo != module_lo:
			lines.extend(c.render() for c in comments.get_leading(item.span.lo))
		lines.append(format_item(item))
	if comments is not None:
		lines.extend(c.render() for c in comments.get_trailing(module.span.hi))
	if not lines:
		return ""
	return "\n".join(lines) + "\n"


__all__ = ["format_expr", "format_item", "format_stmt", "print_module"]
