"""
rscc.core: shared span/diagnostic/comment types used across the pipeline.

Modules:
  - span: source spans (line/column plus byte offsets)
  - diagnostics: Diagnostic record and the DiagnosticSink collector
  - comments: comment side table keyed by source position
"""

__all__ = [
    "span",
    "diagnostics",
    "comments",
]
