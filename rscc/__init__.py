# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
rscc: React Server Components module pass.

Pipeline for one module:

  source -> parser (lark) -> AST + comment table
         -> transform.react_server_components (directive scan, proxy rewrite
            or import-graph validation)
         -> codegen printer

The CLI entrypoint is `rscc.rscc:main`.
"""

__all__ = ["core", "parser", "codegen", "transform"]
