# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST for the ECMAScript module subset understood by the rscc parser.

Every node carries a `span` (Span() for synthetic nodes). Nodes are plain
mutable dataclasses; passes rewrite lists such as `Module.body` in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from rscc.core.span import Span


class Node:
	span: Span


class Stmt(Node):
	"""Statements and declarations (declarations are statements here)."""


class Expr(Node):
	pass


class Pat(Node):
	"""Binding patterns (declarator names, function params)."""


class ModuleDecl(Node):
	"""Import/export declarations; only legal at module top level."""


# --- literals / identifiers -------------------------------------------------


@dataclass
class Ident(Expr, Pat):
	sym: str
	span: Span = field(default_factory=Span)


@dataclass
class Str(Expr):
	"""String literal. `value` is cooked (escapes decoded); `raw` keeps quotes."""

	value: str
	raw: Optional[str] = None
	span: Span = field(default_factory=Span)


@dataclass
class Num(Expr):
	value: float
	raw: Optional[str] = None
	span: Span = field(default_factory=Span)


@dataclass
class Bool(Expr):
	value: bool
	span: Span = field(default_factory=Span)


@dataclass
class Null(Expr):
	span: Span = field(default_factory=Span)


@dataclass
class Tpl(Expr):
	"""
	Template literal. `quasis` are the raw text chunks between substitutions
	(backticks and `${`/`}` excluded), always one more than `exprs`.
	"""

	quasis: List[str]
	exprs: List[Expr] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class Regex(Expr):
	pattern: str
	flags: str = ""
	span: Span = field(default_factory=Span)


@dataclass
class ThisExpr(Expr):
	span: Span = field(default_factory=Span)


@dataclass
class SuperExpr(Expr):
	span: Span = field(default_factory=Span)


# --- compound expressions ---------------------------------------------------


@dataclass
class SpreadElement(Node):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ArrayLit(Expr):
	elems: List[Union[Expr, SpreadElement, None]] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class ComputedPropName(Node):
	expr: Expr
	span: Span = field(default_factory=Span)


PropName = Union[Ident, Str, Num, ComputedPropName]


@dataclass
class KeyValueProp(Node):
	key: PropName
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ShorthandProp(Node):
	ident: Ident
	span: Span = field(default_factory=Span)


@dataclass
class MethodProp(Node):
	key: PropName
	function: "Function"
	kind: str = "method"  # "method" | "get" | "set"
	span: Span = field(default_factory=Span)


Prop = Union[KeyValueProp, ShorthandProp, MethodProp, SpreadElement]


@dataclass
class ObjectLit(Expr):
	props: List[Prop] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class Function(Node):
	params: List[Pat]
	body: "BlockStmt"
	is_async: bool = False
	is_generator: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class FnExpr(Expr):
	ident: Optional[Ident]
	function: Function
	span: Span = field(default_factory=Span)


@dataclass
class ArrowExpr(Expr):
	params: List[Pat]
	body: Union["BlockStmt", Expr]
	is_async: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class ClassMethod(Node):
	key: PropName
	function: Function
	kind: str = "method"  # "method" | "get" | "set" | "constructor"
	is_static: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class ClassProp(Node):
	key: PropName
	value: Optional[Expr] = None
	is_static: bool = False
	span: Span = field(default_factory=Span)


ClassMember = Union[ClassMethod, ClassProp]


@dataclass
class Class(Node):
	super_class: Optional[Expr]
	body: List[ClassMember] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class ClassExpr(Expr):
	ident: Optional[Ident]
	class_: Class
	span: Span = field(default_factory=Span)


@dataclass
class ParenExpr(Expr):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class MemberExpr(Expr):
	obj: Expr
	prop: Union[Ident, ComputedPropName]
	span: Span = field(default_factory=Span)


@dataclass
class CallExpr(Expr):
	callee: Expr
	args: List[Union[Expr, SpreadElement]] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class Import(Expr):
	"""Callee of a dynamic `import(...)` call."""

	span: Span = field(default_factory=Span)


@dataclass
class TaggedTpl(Expr):
	tag: Expr
	tpl: Tpl
	span: Span = field(default_factory=Span)


@dataclass
class NewExpr(Expr):
	callee: Expr
	args: Optional[List[Union[Expr, SpreadElement]]] = None
	span: Span = field(default_factory=Span)


@dataclass
class UnaryExpr(Expr):
	op: str
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class AwaitExpr(Expr):
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class BinExpr(Expr):
	op: str
	left: Expr
	right: Expr
	span: Span = field(default_factory=Span)


@dataclass
class CondExpr(Expr):
	test: Expr
	cons: Expr
	alt: Expr
	span: Span = field(default_factory=Span)


@dataclass
class AssignExpr(Expr):
	op: str
	left: Union[Expr, Pat]
	right: Expr
	span: Span = field(default_factory=Span)


# --- patterns ---------------------------------------------------------------


@dataclass
class AssignPatProp(Node):
	"""`{ key }` or `{ key = default }` inside an object pattern."""

	key: Ident
	value: Optional[Expr] = None
	span: Span = field(default_factory=Span)


@dataclass
class KeyValuePatProp(Node):
	"""`{ key: pattern }` inside an object pattern."""

	key: PropName
	value: Pat
	span: Span = field(default_factory=Span)


@dataclass
class RestPat(Pat):
	arg: Pat
	span: Span = field(default_factory=Span)


@dataclass
class ObjectPat(Pat):
	props: List[Union[AssignPatProp, KeyValuePatProp, RestPat]] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class ArrayPat(Pat):
	elems: List[Optional[Pat]] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class AssignPat(Pat):
	"""Pattern with a default value (`a = 1` in params/array patterns)."""

	left: Pat
	right: Expr
	span: Span = field(default_factory=Span)


# --- jsx --------------------------------------------------------------------


@dataclass
class JSXMemberName(Node):
	"""`<a.b.c>`; a plain `<div>` is a single-part name."""

	parts: List[str]
	span: Span = field(default_factory=Span)


@dataclass
class JSXNamespacedName(Node):
	ns: str
	name: str
	span: Span = field(default_factory=Span)


JSXName = Union[JSXMemberName, JSXNamespacedName]


@dataclass
class JSXText(Node):
	"""Raw child text, whitespace and entities untouched."""

	raw: str
	span: Span = field(default_factory=Span)


@dataclass
class JSXExprContainer(Node):
	expr: Optional[Expr] = None  # `{}` and `{/* comment */}`
	span: Span = field(default_factory=Span)


@dataclass
class JSXSpreadChild(Node):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class JSXAttr(Node):
	name: str  # `ns:name` kept as one string
	value: Optional[Union[Str, JSXExprContainer, JSXElement, JSXFragment]] = None
	span: Span = field(default_factory=Span)


@dataclass
class JSXSpreadAttr(Node):
	expr: Expr
	span: Span = field(default_factory=Span)


JSXAttrOrSpread = Union[JSXAttr, JSXSpreadAttr]
JSXChild = Union[JSXText, JSXExprContainer, JSXSpreadChild, "JSXElement", "JSXFragment"]


@dataclass
class JSXElement(Expr):
	name: JSXName
	attrs: List[JSXAttrOrSpread] = field(default_factory=list)
	children: List[JSXChild] = field(default_factory=list)
	self_closing: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class JSXFragment(Expr):
	children: List[JSXChild] = field(default_factory=list)
	span: Span = field(default_factory=Span)


# --- statements -------------------------------------------------------------


@dataclass
class ExprStmt(Stmt):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class BlockStmt(Stmt):
	stmts: List[Stmt] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class EmptyStmt(Stmt):
	span: Span = field(default_factory=Span)


@dataclass
class VarDeclarator(Node):
	name: Pat
	init: Optional[Expr] = None
	span: Span = field(default_factory=Span)


@dataclass
class VarDecl(Stmt):
	kind: str  # "var" | "let" | "const"
	decls: List[VarDeclarator] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class FnDecl(Stmt):
	ident: Ident
	function: Function
	span: Span = field(default_factory=Span)


@dataclass
class ClassDecl(Stmt):
	ident: Ident
	class_: Class
	span: Span = field(default_factory=Span)


@dataclass
class ReturnStmt(Stmt):
	arg: Optional[Expr] = None
	span: Span = field(default_factory=Span)


@dataclass
class ThrowStmt(Stmt):
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class IfStmt(Stmt):
	test: Expr
	cons: Stmt
	alt: Optional[Stmt] = None
	span: Span = field(default_factory=Span)


@dataclass
class WhileStmt(Stmt):
	test: Expr
	body: Stmt
	span: Span = field(default_factory=Span)


# --- module declarations ----------------------------------------------------


ModuleExportName = Union[Ident, Str]


@dataclass
class ImportNamedSpecifier(Node):
	"""`{ imported as local }`; `imported` is None when no alias is written."""

	local: Ident
	imported: Optional[ModuleExportName] = None
	span: Span = field(default_factory=Span)


@dataclass
class ImportDefaultSpecifier(Node):
	local: Ident
	span: Span = field(default_factory=Span)


@dataclass
class ImportStarAsSpecifier(Node):
	local: Ident
	span: Span = field(default_factory=Span)


ImportSpecifier = Union[ImportNamedSpecifier, ImportDefaultSpecifier, ImportStarAsSpecifier]


@dataclass
class ImportDecl(ModuleDecl):
	specifiers: List[ImportSpecifier]
	src: Str
	span: Span = field(default_factory=Span)


@dataclass
class ExportDecl(ModuleDecl):
	"""`export const ...`, `export function ...`, `export class ...`."""

	decl: Stmt
	span: Span = field(default_factory=Span)


@dataclass
class ExportDefaultDecl(ModuleDecl):
	"""`export default function ...` / `export default class ...`."""

	decl: Union[FnExpr, ClassExpr]
	span: Span = field(default_factory=Span)


@dataclass
class ExportDefaultExpr(ModuleDecl):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ExportNamedSpecifier(Node):
	orig: ModuleExportName
	exported: Optional[ModuleExportName] = None
	span: Span = field(default_factory=Span)


@dataclass
class NamedExport(ModuleDecl):
	specifiers: List[ExportNamedSpecifier] = field(default_factory=list)
	src: Optional[Str] = None
	span: Span = field(default_factory=Span)


@dataclass
class ExportAll(ModuleDecl):
	src: Str
	alias: Optional[ModuleExportName] = None  # `export * as ns from "m"`
	span: Span = field(default_factory=Span)


ModuleItem = Union[Stmt, ModuleDecl]


@dataclass
class Module(Node):
	body: List[ModuleItem] = field(default_factory=list)
	span: Span = field(default_factory=Span)


