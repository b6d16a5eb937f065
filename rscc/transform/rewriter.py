# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Client-boundary rewrite for the server compilation.

The module body is replaced by a reference proxy:

	/* __next_internal_client_entry_do_not_use__ */
	const { createProxy } = require("private-next-rsc-mod-ref-proxy");
	module.exports = createProxy("<filepath>");

All synthetic nodes carry the dummy span.
"""

from __future__ import annotations

from rscc.core.comments import Comment, CommentKind, Comments
from rscc.parser import ast as A

from .denylist import CLIENT_ENTRY_SENTINEL, PROXY_FACTORY, PROXY_MODULE


def _proxy_import() -> A.VarDecl:
	require = A.CallExpr(callee=A.Ident("require"), args=[A.Str(PROXY_MODULE)])
	pattern = A.ObjectPat(props=[A.AssignPatProp(key=A.Ident(PROXY_FACTORY))])
	return A.VarDecl(kind="const", decls=[A.VarDeclarator(name=pattern, init=require)])


def _proxy_export(filepath: str) -> A.ExprStmt:
	target = A.MemberExpr(obj=A.Ident("module"), prop=A.Ident("exports"))
	proxy = A.CallExpr(callee=A.Ident(PROXY_FACTORY), args=[A.Str(filepath)])
	return A.ExprStmt(expr=A.AssignExpr(op="=", left=target, right=proxy))


def rewrite_to_module_reference(module: A.Module, filepath: str, comments: Comments) -> None:
	"""Replace `module.body` with the proxy stub and mark the module start."""
	module.body.clear()
	module.body.extend([_proxy_import(), _proxy_export(filepath)])
	module_lo = module.span.lo if module.span.lo is not None else 0
	comments.add_leading(module_lo, Comment(kind=CommentKind.BLOCK, text=CLIENT_ENTRY_SENTINEL))


__all__ = ["rewrite_to_module_reference"]
