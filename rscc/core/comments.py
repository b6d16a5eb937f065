# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Comment side table.

Comments live outside the AST, keyed by the byte position (`Span.lo`) of the
node they are attached to. The parser fills the table; passes attach new
entries (e.g. the client-entry sentinel); the printer reads it back.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .span import Span


class CommentKind(Enum):
	LINE = "line"
	BLOCK = "block"


@dataclass(frozen=True)
class Comment:
	kind: CommentKind
	text: str  # body without the `//` or `/* */` delimiters
	span: Span = field(default_factory=Span)

	def render(self) -> str:
		if self.kind is CommentKind.LINE:
			return f"//{self.text}"
		return f"/*{self.text}*/"


class Comments:
	"""Leading/trailing comment lists keyed by source position."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._leading: Dict[int, List[Comment]] = {}
		self._trailing: Dict[int, List[Comment]] = {}

	def add_leading(self, pos: int, comment: Comment) -> None:
		with self._lock:
			self._leading.setdefault(pos, []).append(comment)

	def add_trailing(self, pos: int, comment: Comment) -> None:
		with self._lock:
			self._trailing.setdefault(pos, []).append(comment)

	def get_leading(self, pos: int | None) -> List[Comment]:
		if pos is None:
			return []
		with self._lock:
			return list(self._leading.get(pos, []))

	def get_trailing(self, pos: int | None) -> List[Comment]:
		if pos is None:
			return []
		with self._lock:
			return list(self._trailing.get(pos, []))

	def has_leading(self, pos: int | None) -> bool:
		return bool(self.get_leading(pos))

	def take_leading(self, pos: int) -> List[Comment]:
		with self._lock:
			return self._leading.pop(pos, [])

	def take_trailing(self, pos: int) -> List[Comment]:
		with self._lock:
			return self._trailing.pop(pos, [])

	def leading_positions(self) -> List[int]:
		with self._lock:
			return sorted(self._leading)


__all__ = ["Comment", "CommentKind", "Comments"]
