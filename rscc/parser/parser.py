# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark front-end: source text -> rscc AST + comment side table.

The grammar (grammar.lark) covers the ECMAScript module subset the pass
needs, JSX included, and is tokenized by JsLexer (lexer.py). Statement ends
are explicit in the grammar; the TerminatorInserter postlexer turns
significant newlines into `_TERMINATOR` tokens the way automatic semicolon
insertion would.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedToken

from rscc.core.comments import Comment, CommentKind, Comments
from rscc.core.span import Span

from . import ast as A
from .lexer import JsLexer

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class TerminatorInserter:
	"""
	Postlexer implementing a practical subset of automatic semicolon insertion.

	A NEWLINE becomes a `_TERMINATOR` when the previous token can end a
	statement, the innermost open bracket is a block brace (or none), and the
	next token cannot continue the expression. A terminator is also inserted
	before a block-closing `}` and at end of input when the last token can end
	a statement.

	Braces are classified when opened: a `{` following a token that expects an
	expression (operators, `(`, `,`, `return`, `import`, ...) opens an object
	literal/pattern/specifier list, where newlines are insignificant; any other
	`{` opens a block (function bodies, class bodies, statements). Template
	substitutions and JSX expression containers always group.
	"""

	always_accept = ("NEWLINE",)

	TERMINABLE = {
		"NAME",
		"STRING",
		"NUMBER",
		"TEMPLATE",
		"TPL_TAIL",
		"REGEX",
		"_JSX_GT",
		"_TRUE",
		"_FALSE",
		"_NULL",
		"_THIS",
		"_SUPER",
		"_RPAR",
		"_RSQB",
		"_RBRACE",
		"_RETURN",
		"FROM",
		"AS",
		"GET",
		"SET",
		"STATIC",
	}

	# Tokens that continue the previous line's expression.
	CONTINUATION = {
		"_DOT",
		"_LPAR",
		"_LSQB",
		"_RPAR",
		"_RSQB",
		"_QMARK",
		"_COLON",
		"_COMMA",
		"_SEMI",
		"_ARROW",
		"_EQ",
		"COMPOUND_ASSIGN",
		"ADD_OP",
		"STAR",
		"MUL_OP",
		"EQ_OP",
		"REL_OP",
		"SHIFT_OP",
		"AND_OP",
		"OR_OP",
		"NULLISH",
		"PIPE",
		"CARET",
		"AMP",
		"IN",
		"INSTANCEOF",
	}

	# `return` followed by a newline always terminates.
	RESTRICTED = {"_RETURN"}

	BLOCK_BRACE_AFTER = {
		None,
		"_RPAR",
		"_ARROW",
		"_RBRACE",
		"_TERMINATOR",
		"_SEMI",
		"_LBRACE",
		"_ELSE",
		"_CLASS",
		"NAME",
		"FROM",
		"AS",
		"GET",
		"SET",
		"STATIC",
	}

	def process(self, stream):
		# Per-call state only: one Lark instance serves every thread.
		stack: list[str] = []
		can_terminate = False
		prev_type: Optional[str] = None
		pending: Optional[Token] = None
		last: Optional[Token] = None

		def in_block() -> bool:
			return not stack or stack[-1] == "block"

		for token in stream:
			ttype = token.type
			if ttype == "NEWLINE":
				if pending is None and can_terminate and in_block():
					pending = token
				continue
			if pending is not None:
				if prev_type in self.RESTRICTED or self._ends_statement(ttype, prev_type):
					yield Token.new_borrow_pos("_TERMINATOR", "", pending)
					prev_type = "_TERMINATOR"
					can_terminate = False
				pending = None
			if ttype == "_RBRACE" and stack and stack[-1] == "block" and can_terminate:
				yield Token.new_borrow_pos("_TERMINATOR", "", token)
				prev_type = "_TERMINATOR"
				can_terminate = False
			if ttype in ("_LPAR", "_LSQB", "_JSX_LBRACE", "TPL_HEAD"):
				stack.append("group")
			elif ttype == "_LBRACE":
				stack.append("block" if prev_type in self.BLOCK_BRACE_AFTER else "group")
			elif ttype in ("_RPAR", "_RSQB", "_RBRACE", "_JSX_RBRACE", "TPL_TAIL") and stack:
				stack.pop()
			yield token
			last = token
			can_terminate = ttype in self.TERMINABLE
			prev_type = ttype
		if last is not None and can_terminate and in_block():
			yield Token.new_borrow_pos("_TERMINATOR", "", last)

	def _ends_statement(self, next_type: str, prev_type: Optional[str]) -> bool:
		"""Whether a newline between `prev_type` and `next_type` ends the statement."""
		if next_type == "_ELSE":
			# `}\nelse` continues an if statement; `foo()\nelse` needs the terminator.
			return prev_type != "_RBRACE"
		return next_type not in self.CONTINUATION


_COMMENT_BUF = threading.local()


def _collect_comment(tok: Token) -> Token:
	buf = getattr(_COMMENT_BUF, "tokens", None)
	if buf is not None:
		buf.append(tok)
	return tok


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="earley",
	lexer=JsLexer,
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
	lexer_callbacks={"LINE_COMMENT": _collect_comment, "BLOCK_COMMENT": _collect_comment},
)


@dataclass
class ParsedModule:
	module: A.Module
	comments: Comments


def parse_module(source: str, *, file: Optional[str] = None) -> ParsedModule:
	"""
	Parse module source. Raises `lark.UnexpectedInput` on syntax errors; use
	`rscc.parser.parse_module_file` to get diagnostics instead.
	"""
	_COMMENT_BUF.tokens = []
	try:
		tree = _PARSER.parse(source)
		comment_tokens = list(_COMMENT_BUF.tokens)
	finally:
		_COMMENT_BUF.tokens = None
	module = AstBuilder(file).build_module(tree, source)
	comments = Comments()
	_attach_comments(module, comment_tokens, comments, file)
	return ParsedModule(module=module, comments=comments)


def _attach_comments(module: A.Module, tokens: List[Token], comments: Comments, file: Optional[str]) -> None:
	"""
	Attach comments that sit between top-level items.

	A comment before the first item is a leading comment of the module; one
	between items leads the next item; one after the last item trails the
	module. Comments nested inside an item are not recorded.
	"""
	items = module.body
	for tok in tokens:
		text = tok.value
		if text.startswith("//"):
			comment = Comment(kind=CommentKind.LINE, text=text[2:], span=Span.from_loc(tok, file=file))
		else:
			comment = Comment(kind=CommentKind.BLOCK, text=text[2:-2], span=Span.from_loc(tok, file=file))
		start = tok.start_pos
		prev_hi = None
		target = None
		for item in items:
			if item.span.lo is not None and item.span.lo >= tok.end_pos:
				target = item
				break
			prev_hi = item.span.hi
		if prev_hi is not None and start < prev_hi:
			continue
		if target is None:
			comments.add_trailing(module.span.hi or 0, comment)
		elif target is items[0]:
			comments.add_leading(module.span.lo or 0, comment)
		else:
			comments.add_leading(target.span.lo, comment)


_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	"v": "\v",
	"0": "\0",
	"\n": "",
	"\r\n": "",
	"\u2028": "",
	"\u2029": "",
}


def _decode_string(raw: str) -> str:
	"""Cook a quoted string literal (quotes included) into its value."""

	def _replace(m: re.Match) -> str:
		esc = m.group(1)
		if esc.startswith("u{"):
			return chr(int(esc[2:-1], 16))
		if esc[0] in "ux" and len(esc) > 1:
			return chr(int(esc[1:], 16))
		return _SIMPLE_ESCAPES.get(esc, esc)

	return _ESCAPE_RE.sub(_replace, raw[1:-1])


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _has_token(tree: Tree, ttype: str) -> bool:
	return any(isinstance(child, Token) and child.type == ttype for child in tree.children)


def _token(tree: Tree) -> Token:
	return next(child for child in tree.children if isinstance(child, Token))


class AstBuilder:
	"""Builds rscc AST nodes from the lark parse tree."""

	def __init__(self, file: Optional[str] = None) -> None:
		self.file = file

	def _span(self, node: Tree | Token) -> Span:
		if isinstance(node, Tree):
			return Span.from_loc(node.meta, file=self.file)
		return Span.from_loc(node, file=self.file)

	# --- module -----------------------------------------------------------

	def build_module(self, tree: Tree, source: str) -> A.Module:
		if _name(tree) == "start":
			tree = _trees(tree)[0]
		body = [self._build_item(child) for child in _trees(tree)]
		span = Span(file=self.file, line=1, column=1, lo=0, hi=len(source))
		return A.Module(body=body, span=span)

	def _build_item(self, tree: Tree) -> A.ModuleItem:
		kind = _name(tree)
		if kind == "import_decl":
			return self._build_import_decl(tree)
		if kind == "import_bare":
			return A.ImportDecl(specifiers=[], src=self._build_str(_trees(tree)[0]), span=self._span(tree))
		if kind == "export_default_decl":
			return A.ExportDefaultDecl(decl=self._build_expr(_trees(tree)[0]), span=self._span(tree))
		if kind == "export_default_expr":
			return A.ExportDefaultExpr(expr=self._build_expr(_trees(tree)[0]), span=self._span(tree))
		if kind == "export_named_decl":
			return A.ExportDecl(decl=self._build_stmt(_trees(tree)[0]), span=self._span(tree))
		if kind == "named_export":
			return self._build_named_export(tree)
		if kind == "export_all":
			return self._build_export_all(tree)
		return self._build_stmt(tree)

	def _build_import_decl(self, tree: Tree) -> A.ImportDecl:
		specifiers: List[A.ImportSpecifier] = []
		src: Optional[A.Str] = None
		for child in _trees(tree):
			kind = _name(child)
			if kind == "default_spec":
				local = self._build_ident(_trees(child)[0])
				specifiers.append(A.ImportDefaultSpecifier(local=local, span=local.span))
			elif kind == "namespace_spec":
				local = self._build_ident(_trees(child)[0])
				specifiers.append(A.ImportStarAsSpecifier(local=local, span=self._span(child)))
			elif kind == "named_spec":
				local = self._build_ident(_trees(child)[0])
				specifiers.append(A.ImportNamedSpecifier(local=local, imported=None, span=self._span(child)))
			elif kind == "named_spec_alias":
				imported_node, local_node = _trees(child)
				specifiers.append(
					A.ImportNamedSpecifier(
						local=self._build_ident(local_node),
						imported=self._build_export_name(imported_node),
						span=self._span(child),
					)
				)
			elif kind == "str_lit":
				src = self._build_str(child)
		assert src is not None, "import without source"
		return A.ImportDecl(specifiers=specifiers, src=src, span=self._span(tree))

	def _build_export_name(self, tree: Tree) -> A.ModuleExportName:
		if _name(tree) == "str_lit":
			return self._build_str(tree)
		return self._build_ident(tree)

	def _build_named_export(self, tree: Tree) -> A.NamedExport:
		specifiers: List[A.ExportNamedSpecifier] = []
		src: Optional[A.Str] = None
		for child in _trees(tree):
			if _name(child) == "export_spec":
				names = [self._build_export_name(n) for n in _trees(child)]
				specifiers.append(
					A.ExportNamedSpecifier(
						orig=names[0],
						exported=names[1] if len(names) > 1 else None,
						span=self._span(child),
					)
				)
			else:
				src = self._build_str(child)
		return A.NamedExport(specifiers=specifiers, src=src, span=self._span(tree))

	def _build_export_all(self, tree: Tree) -> A.ExportAll:
		children = _trees(tree)
		src = self._build_str(children[-1])
		alias = self._build_export_name(children[0]) if len(children) > 1 else None
		return A.ExportAll(src=src, alias=alias, span=self._span(tree))

	# --- statements -------------------------------------------------------

	def _build_stmt(self, tree: Tree) -> A.Stmt:
		kind = _name(tree)
		span = self._span(tree)
		children = _trees(tree)
		if kind == "block_stmt":
			return self._build_block(tree)
		if kind == "empty_stmt":
			return A.EmptyStmt(span=span)
		if kind == "expr_stmt":
			return A.ExprStmt(expr=self._build_expr(children[0]), span=span)
		if kind == "var_decl":
			var_kind = _token(children[0]).value
			decls = [self._build_var_declarator(c) for c in children[1:]]
			return A.VarDecl(kind=var_kind, decls=decls, span=span)
		if kind == "fn_decl":
			ident = self._build_ident(children[0])
			return A.FnDecl(ident=ident, function=self._build_function(tree), span=span)
		if kind == "class_decl":
			return A.ClassDecl(ident=self._build_ident(children[0]), class_=self._build_class(tree), span=span)
		if kind == "return_stmt":
			arg = self._build_expr(children[0]) if children else None
			return A.ReturnStmt(arg=arg, span=span)
		if kind == "throw_stmt":
			return A.ThrowStmt(arg=self._build_expr(children[0]), span=span)
		if kind == "if_stmt":
			alt = self._build_stmt(children[2]) if len(children) > 2 else None
			return A.IfStmt(
				test=self._build_expr(children[0]),
				cons=self._build_stmt(children[1]),
				alt=alt,
				span=span,
			)
		if kind == "while_stmt":
			return A.WhileStmt(test=self._build_expr(children[0]), body=self._build_stmt(children[1]), span=span)
		raise ValueError(f"unexpected statement node {kind}")

	def _build_block(self, tree: Tree) -> A.BlockStmt:
		return A.BlockStmt(stmts=[self._build_stmt(c) for c in _trees(tree)], span=self._span(tree))

	def _build_var_declarator(self, tree: Tree) -> A.VarDeclarator:
		children = _trees(tree)
		init = self._build_expr(children[1]) if len(children) > 1 else None
		return A.VarDeclarator(name=self._build_pat(children[0]), init=init, span=self._span(tree))

	# --- functions / classes ----------------------------------------------

	def _build_params(self, tree: Tree) -> List[A.Pat]:
		return [self._build_pat(c) for c in _trees(tree)]

	def _build_function(self, tree: Tree) -> A.Function:
		"""Shared by fn_decl/fn_expr/method_def: `params` and body are the last two trees."""
		children = _trees(tree)
		params_node = next(c for c in children if _name(c) == "params")
		return A.Function(
			params=self._build_params(params_node),
			body=self._build_block(children[-1]),
			is_async=_has_token(tree, "ASYNC"),
			is_generator=_has_token(tree, "STAR"),
			span=self._span(tree),
		)

	def _build_class(self, tree: Tree) -> A.Class:
		super_class = None
		members: List[A.ClassMember] = []
		for child in _trees(tree):
			kind = _name(child)
			if kind == "class_heritage":
				super_class = self._build_expr(_trees(child)[0])
			elif kind == "class_body":
				members = [self._build_class_member(m) for m in _trees(child)]
		return A.Class(super_class=super_class, body=members, span=self._span(tree))

	def _build_class_member(self, tree: Tree) -> A.ClassMember:
		is_static = _has_token(tree, "STATIC")
		children = _trees(tree)
		if _name(tree) == "class_prop":
			value = self._build_expr(children[1]) if len(children) > 1 else None
			return A.ClassProp(key=self._build_prop_name(children[0]), value=value, is_static=is_static, span=self._span(tree))
		key, function, kind = self._build_method_like(children[0])
		if kind == "method" and isinstance(key, A.Ident) and key.sym == "constructor" and not is_static:
			kind = "constructor"
		return A.ClassMethod(key=key, function=function, kind=kind, is_static=is_static, span=self._span(tree))

	def _build_method_like(self, tree: Tree) -> tuple[A.PropName, A.Function, str]:
		kind = {"method_def": "method", "getter_def": "get", "setter_def": "set"}[_name(tree)]
		children = _trees(tree)
		key = self._build_prop_name(children[0])
		if kind == "get":
			function = A.Function(params=[], body=self._build_block(children[-1]), span=self._span(tree))
		else:
			function = self._build_function(tree)
		return key, function, kind

	def _build_prop_name(self, tree: Tree) -> A.PropName:
		kind = _name(tree)
		if kind == "prop_ident" or kind == "ident":
			return self._build_ident(tree)
		if kind == "str_lit":
			return self._build_str(tree)
		if kind == "num_lit":
			return self._build_num(tree)
		if kind == "computed_prop":
			return A.ComputedPropName(expr=self._build_expr(_trees(tree)[0]), span=self._span(tree))
		raise ValueError(f"unexpected property name node {kind}")

	# --- patterns ---------------------------------------------------------

	def _build_pat(self, tree: Tree) -> A.Pat:
		kind = _name(tree)
		span = self._span(tree)
		children = _trees(tree)
		if kind == "ident":
			return self._build_ident(tree)
		if kind == "object_pat":
			return A.ObjectPat(props=[self._build_pat_prop(c) for c in children], span=span)
		if kind == "array_pat":
			return A.ArrayPat(elems=[self._build_pat(c) for c in children], span=span)
		if kind == "assign_pat":
			return A.AssignPat(left=self._build_pat(children[0]), right=self._build_expr(children[1]), span=span)
		if kind == "rest_pat":
			return A.RestPat(arg=self._build_pat(children[0]), span=span)
		raise ValueError(f"unexpected pattern node {kind}")

	def _build_pat_prop(self, tree: Tree):
		kind = _name(tree)
		children = _trees(tree)
		if kind == "assign_pat_prop":
			value = self._build_expr(children[1]) if len(children) > 1 else None
			return A.AssignPatProp(key=self._build_ident(children[0]), value=value, span=self._span(tree))
		if kind == "kv_pat_prop":
			return A.KeyValuePatProp(
				key=self._build_prop_name(children[0]),
				value=self._build_pat(children[1]),
				span=self._span(tree),
			)
		return self._build_pat(tree)

	# --- expressions ------------------------------------------------------

	def _build_ident(self, tree: Tree) -> A.Ident:
		tok = _token(tree)
		return A.Ident(sym=tok.value, span=self._span(tok))

	def _build_str(self, tree: Tree) -> A.Str:
		tok = _token(tree)
		return A.Str(value=_decode_string(tok.value), raw=tok.value, span=self._span(tok))

	def _build_num(self, tree: Tree) -> A.Num:
		tok = _token(tree)
		raw = tok.value
		value = float(int(raw, 16)) if raw[:2] in ("0x", "0X") else float(raw)
		return A.Num(value=value, raw=raw, span=self._span(tok))

	def _build_args(self, tree: Tree) -> List[A.Expr | A.SpreadElement]:
		return [self._build_expr(c) for c in _trees(tree)]

	def _build_expr(self, tree: Tree):
		kind = _name(tree)
		span = self._span(tree)
		children = _trees(tree)
		if kind in ("ident", "prop_ident"):
			return self._build_ident(tree)
		if kind == "str_lit":
			return self._build_str(tree)
		if kind == "num_lit":
			return self._build_num(tree)
		if kind == "tpl_lit":
			return self._build_tpl(tree)
		if kind == "tagged_tpl":
			return A.TaggedTpl(tag=self._build_expr(children[0]), tpl=self._build_tpl(children[1]), span=span)
		if kind == "regex_lit":
			raw = _token(tree).value
			end = raw.rindex("/")
			return A.Regex(pattern=raw[1:end], flags=raw[end + 1 :], span=span)
		if kind == "import_call":
			return A.CallExpr(callee=A.Import(span=span), args=self._build_args(children[0]), span=span)
		if kind in ("jsx_element", "jsx_fragment"):
			return self._build_jsx(tree)
		if kind == "true_lit":
			return A.Bool(value=True, span=span)
		if kind == "false_lit":
			return A.Bool(value=False, span=span)
		if kind == "null_lit":
			return A.Null(span=span)
		if kind == "this_expr":
			return A.ThisExpr(span=span)
		if kind == "super_expr":
			return A.SuperExpr(span=span)
		if kind == "spread":
			return A.SpreadElement(expr=self._build_expr(children[0]), span=span)
		if kind == "array_lit":
			return A.ArrayLit(elems=[self._build_expr(c) for c in children], span=span)
		if kind == "object_lit":
			return A.ObjectLit(props=[self._build_prop(c) for c in children], span=span)
		if kind == "paren_expr":
			return A.ParenExpr(expr=self._build_expr(children[0]), span=span)
		if kind == "fn_expr":
			ident = self._build_ident(children[0]) if _name(children[0]) == "ident" else None
			return A.FnExpr(ident=ident, function=self._build_function(tree), span=span)
		if kind == "arrow_fn":
			params_node, body_node = children
			inner = _trees(params_node)[0]
			params = [self._build_ident(inner)] if _name(inner) == "ident" else self._build_params(inner)
			body = self._build_block(body_node) if _name(body_node) == "block_stmt" else self._build_expr(body_node)
			return A.ArrowExpr(params=params, body=body, is_async=_has_token(tree, "ASYNC"), span=span)
		if kind == "class_expr":
			ident = self._build_ident(children[0]) if children and _name(children[0]) == "ident" else None
			return A.ClassExpr(ident=ident, class_=self._build_class(tree), span=span)
		if kind == "member_dot":
			return A.MemberExpr(obj=self._build_expr(children[0]), prop=self._build_ident(children[1]), span=span)
		if kind == "member_index":
			prop = A.ComputedPropName(expr=self._build_expr(children[1]), span=self._span(children[1]))
			return A.MemberExpr(obj=self._build_expr(children[0]), prop=prop, span=span)
		if kind == "call_expr":
			return A.CallExpr(callee=self._build_expr(children[0]), args=self._build_args(children[1]), span=span)
		if kind == "new_expr":
			return A.NewExpr(callee=self._build_expr(children[0]), args=self._build_args(children[1]), span=span)
		if kind == "new_bare":
			return A.NewExpr(callee=self._build_expr(children[0]), args=None, span=span)
		if kind == "unary_expr":
			return A.UnaryExpr(op=_token(tree).value, arg=self._build_expr(children[0]), span=span)
		if kind == "await_expr":
			return A.AwaitExpr(arg=self._build_expr(children[0]), span=span)
		if kind == "bin_expr":
			return A.BinExpr(
				op=_token(tree).value,
				left=self._build_expr(children[0]),
				right=self._build_expr(children[1]),
				span=span,
			)
		if kind == "cond_expr":
			test, cons, alt = (self._build_expr(c) for c in children)
			return A.CondExpr(test=test, cons=cons, alt=alt, span=span)
		if kind == "assign_expr":
			left_node, op_node, right_node = children
			return A.AssignExpr(
				op=_token(op_node).value,
				left=self._build_expr(left_node),
				right=self._build_expr(right_node),
				span=span,
			)
		raise ValueError(f"unexpected expression node {kind}")

	def _build_prop(self, tree: Tree) -> A.Prop:
		kind = _name(tree)
		children = _trees(tree)
		if kind == "kv_prop":
			return A.KeyValueProp(key=self._build_prop_name(children[0]), value=self._build_expr(children[1]), span=self._span(tree))
		if kind == "shorthand_prop":
			return A.ShorthandProp(ident=self._build_ident(children[0]), span=self._span(tree))
		if kind == "spread":
			return self._build_expr(tree)
		key, function, method_kind = self._build_method_like(tree)
		return A.MethodProp(key=key, function=function, kind=method_kind, span=self._span(tree))

	def _build_tpl(self, tree: Tree) -> A.Tpl:
		"""`quasis` come from the template tokens; their delimiters are cut off."""
		quasis: List[str] = []
		exprs: List[A.Expr] = []
		for child in tree.children:
			if isinstance(child, Tree):
				exprs.append(self._build_expr(child))
			elif child.type in ("TEMPLATE", "TPL_TAIL"):
				quasis.append(child.value[1:-1])
			else:
				quasis.append(child.value[1:-2])
		return A.Tpl(quasis=quasis, exprs=exprs, span=self._span(tree))

	# --- jsx --------------------------------------------------------------

	def _build_jsx(self, tree: Tree) -> A.JSXElement | A.JSXFragment:
		span = self._span(tree)
		children = _trees(tree)
		if _name(tree) == "jsx_fragment":
			return A.JSXFragment(children=[self._build_jsx_child(c) for c in children], span=span)
		opening = children[0]
		tag = _trees(opening)
		name = self._build_jsx_name(tag[0])
		attrs = [self._build_jsx_attr(a) for a in tag[1:]]
		if _name(opening) == "jsx_self_closing":
			return A.JSXElement(name=name, attrs=attrs, self_closing=True, span=span)
		closing = children[-1]
		closing_name = _trees(closing)[0]
		if _jsx_name_text(self._build_jsx_name(closing_name)) != _jsx_name_text(name):
			raise UnexpectedToken(_token(closing_name), {_jsx_name_text(name)})
		return A.JSXElement(
			name=name,
			attrs=attrs,
			children=[self._build_jsx_child(c) for c in children[1:-1]],
			span=span,
		)

	def _build_jsx_name(self, tree: Tree) -> A.JSXName:
		parts = [tok.value for tok in tree.children if isinstance(tok, Token)]
		if _name(tree) == "jsx_namespaced_name":
			return A.JSXNamespacedName(ns=parts[0], name=parts[1], span=self._span(tree))
		return A.JSXMemberName(parts=parts, span=self._span(tree))

	def _build_jsx_attr(self, tree: Tree) -> A.JSXAttrOrSpread:
		span = self._span(tree)
		children = _trees(tree)
		if _name(tree) == "jsx_spread_attr":
			return A.JSXSpreadAttr(expr=self._build_expr(children[0]), span=span)
		name = ":".join(tok.value for tok in children[0].children)
		value = None
		if len(children) > 1:
			node = children[1]
			kind = _name(node)
			if kind == "jsx_str":
				raw = _token(node).value
				value = A.Str(value=raw[1:-1], raw=raw, span=self._span(node))
			elif kind == "jsx_expr_container":
				value = self._build_jsx_child(node)
			else:
				value = self._build_jsx(node)
		return A.JSXAttr(name=name, value=value, span=span)

	def _build_jsx_child(self, tree: Tree) -> A.JSXChild:
		kind = _name(tree)
		span = self._span(tree)
		children = _trees(tree)
		if kind == "jsx_text":
			return A.JSXText(raw=_token(tree).value, span=span)
		if kind == "jsx_expr_container":
			expr = self._build_expr(children[0]) if children else None
			return A.JSXExprContainer(expr=expr, span=span)
		if kind == "jsx_spread_child":
			return A.JSXSpreadChild(expr=self._build_expr(children[0]), span=span)
		return self._build_jsx(tree)


def _jsx_name_text(name: A.JSXName) -> str:
	if isinstance(name, A.JSXNamespacedName):
		return f"{name.ns}:{name.name}"
	return ".".join(name.parts)


__all__ = ["ParsedModule", "TerminatorInserter", "parse_module"]
