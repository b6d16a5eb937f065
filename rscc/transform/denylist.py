# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fixed literals of the Server Components pass.

These values are matched byte-for-byte by the framework runtime and its
bundler integration; do not change them.
"""

from __future__ import annotations

# Directive that marks a module as a client boundary (`"client";`).
CLIENT_DIRECTIVE = "client"

# Module whose factory builds the reference proxy for a client module.
PROXY_MODULE = "private-next-rsc-mod-ref-proxy"
PROXY_FACTORY = "createProxy"

# Body of the block comment placed at the top of a rewritten module.
CLIENT_ENTRY_SENTINEL = " __next_internal_client_entry_do_not_use__ "

SERVER_DISALLOWED_SOURCES: frozenset[str] = frozenset(
	{
		"client-only",
		"react-dom/client",
		"react-dom/server",
	}
)

CLIENT_DISALLOWED_SOURCES: frozenset[str] = frozenset({"server-only"})

SERVER_DISALLOWED_REACT_APIS: frozenset[str] = frozenset(
	{
		"Component",
		"createContext",
		"createFactory",
		"PureComponent",
		"useDeferredValue",
		"useEffect",
		"useImperativeHandle",
		"useInsertionEffect",
		"useLayoutEffect",
		"useReducer",
		"useRef",
		"useState",
		"useSyncExternalStore",
		"useTransition",
	}
)

SERVER_DISALLOWED_REACT_DOM_APIS: frozenset[str] = frozenset(
	{
		"findDOMNode",
		"flushSync",
		"unstable_batchedUpdates",
	}
)

__all__ = [
	"CLIENT_DIRECTIVE",
	"PROXY_MODULE",
	"PROXY_FACTORY",
	"CLIENT_ENTRY_SENTINEL",
	"SERVER_DISALLOWED_SOURCES",
	"CLIENT_DISALLOWED_SOURCES",
	"SERVER_DISALLOWED_REACT_APIS",
	"SERVER_DISALLOWED_REACT_DOM_APIS",
]
