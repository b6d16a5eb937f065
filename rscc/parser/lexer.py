# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Context-sensitive tokenizer for grammar.lark.

lark's basic lexer is context free, which JavaScript is not: `/` starts a
regular expression only where an expression may start (otherwise it divides),
`<` opens a JSX element under the same condition, and the text of JSX
children and template literals is not code at all. JsLexer keeps a mode stack
for these cases and tokenizes ordinary code with a scanner compiled from the
grammar's own terminal definitions, so the grammar stays the single source of
token patterns.

Modes:

	js        ordinary code (top level, `{...}` inside JSX, `${...}` in templates)
	tag       between `<` and `>` of a JSX opening or closing tag
	children  between a JSX opening tag and its closing tag
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from lark import Token
from lark.exceptions import UnexpectedCharacters
from lark.lexer import Lexer

# After these tokens an expression has just ended, so `/` divides and `<`
# compares instead of starting a regex or a JSX element.
EXPR_END = frozenset(
	{
		"NAME",
		"STRING",
		"NUMBER",
		"TEMPLATE",
		"TPL_TAIL",
		"REGEX",
		"_TRUE",
		"_FALSE",
		"_NULL",
		"_THIS",
		"_SUPER",
		"_RPAR",
		"_RSQB",
		"_RBRACE",
		"_JSX_GT",
		"FROM",
		"AS",
		"GET",
		"SET",
		"STATIC",
	}
)

_REGEX_RE = re.compile(r"/(?:[^\\/\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[A-Za-z]*")
_TEMPLATE_CHUNK_RE = re.compile(r"(?:[^`\\$]|\\[\s\S]|\$(?!\{))*(`|\$\{)")
_JSX_START_RE = re.compile(r"<[A-Za-z_$>]")
_JSX_NAME_RE = re.compile(r"[A-Za-z_$][\w$-]*")
_JSX_STRING_RE = re.compile(r"\"[^\"]*\"|'[^']*'")
_JSX_TEXT_RE = re.compile(r"[^{<]+")
_JSX_SPACE_RE = re.compile(r"\s+")
_JSX_COMMENT_RE = re.compile(r"(?P<LINE_COMMENT>//[^\n]*)|(?P<BLOCK_COMMENT>/\*[\s\S]*?\*/)")
_JSX_PUNCT = {"=": "_EQ", ".": "_DOT", ":": "_COLON"}


@dataclass
class _Frame:
	mode: str
	# js: "root", "jsx" or "tpl". tag: "open", "close" or "self".
	kind: str = ""
	# js: unmatched `{` count. tag: tokens seen since `<`.
	depth: int = 0


class _Cursor:
	def __init__(self, text: str) -> None:
		self.text = text
		self.pos = 0
		self.line = 1
		self.column = 1

	def at_end(self) -> bool:
		return self.pos >= len(self.text)

	def peek(self, offset: int = 0) -> str:
		return self.text[self.pos + offset : self.pos + offset + 1]

	def advance(self, length: int) -> str:
		value = self.text[self.pos : self.pos + length]
		newlines = value.count("\n")
		if newlines:
			self.line += newlines
			self.column = len(value) - value.rfind("\n")
		else:
			self.column += len(value)
		self.pos += length
		return value

	def take(self, type_: str, length: int) -> Token:
		start, line, column = self.pos, self.line, self.column
		value = self.advance(length)
		return Token(type_, value, start, line, column, self.line, self.column, self.pos)

	def error(self) -> UnexpectedCharacters:
		return UnexpectedCharacters(self.text, self.pos, self.line, self.column)


class JsLexer(Lexer):
	"""lark custom lexer: `Lark(..., lexer=JsLexer)`."""

	IDENT_TERMINAL = "NAME"

	def __init__(self, lexer_conf) -> None:
		terminals = sorted(
			lexer_conf.terminals,
			key=lambda t: (-t.priority, -t.pattern.max_width, -len(t.pattern.value), t.name),
		)
		ident = next(t for t in terminals if t.name == self.IDENT_TERMINAL)
		ident_re = re.compile(ident.pattern.to_regexp())
		# Keywords are lexed as identifiers and retyped, so `important` stays a NAME.
		self.keywords = {
			t.pattern.value: t.name
			for t in terminals
			if t.pattern.type == "str" and ident_re.fullmatch(t.pattern.value)
		}
		keyword_types = set(self.keywords.values())
		self.scanner = re.compile(
			"|".join(
				f"(?P<{t.name}>{t.pattern.to_regexp()})" for t in terminals if t.name not in keyword_types
			)
		)
		self.ignore = frozenset(lexer_conf.ignore)
		self.callbacks = dict(lexer_conf.callbacks or {})

	def lex(self, text: str) -> Iterator[Token]:
		# Per-call state only: one Lark instance serves every thread.
		cur = _Cursor(text)
		stack: List[_Frame] = [_Frame("js", "root")]
		prev: Optional[str] = None
		while not cur.at_end():
			frame = stack[-1]
			if frame.mode == "js":
				tok = self._lex_js(cur, frame, stack, prev)
			elif frame.mode == "tag":
				tok = self._lex_tag(cur, frame, stack)
			else:
				tok = self._lex_children(cur, stack)
			if tok is None:
				continue
			callback = self.callbacks.get(tok.type)
			if callback is not None:
				tok = callback(tok)
			if tok.type in self.ignore:
				continue
			if tok.type != "NEWLINE":
				prev = tok.type
			yield tok

	def _lex_js(self, cur: _Cursor, frame: _Frame, stack: List[_Frame], prev: Optional[str]) -> Token:
		c = cur.peek()
		expr_start = prev not in EXPR_END
		if c == "/" and expr_start and cur.peek(1) not in ("/", "*"):
			m = _REGEX_RE.match(cur.text, cur.pos)
			if m is None:
				raise cur.error()
			return cur.take("REGEX", m.end() - cur.pos)
		if c == "<" and expr_start and _JSX_START_RE.match(cur.text, cur.pos):
			stack.append(_Frame("tag", "open"))
			return cur.take("_JSX_OPEN", 1)
		if c == "`":
			return self._lex_template(cur, stack, "TEMPLATE", "TPL_HEAD")
		if c == "}" and frame.kind != "root" and frame.depth == 0:
			stack.pop()
			if frame.kind == "tpl":
				return self._lex_template(cur, stack, "TPL_TAIL", "TPL_MIDDLE")
			return cur.take("_JSX_RBRACE", 1)

		m = self.scanner.match(cur.text, cur.pos)
		if m is None:
			raise cur.error()
		type_ = m.lastgroup
		value = m.group()
		if type_ == self.IDENT_TERMINAL:
			type_ = self.keywords.get(value, type_)
		if type_ == "_LBRACE":
			frame.depth += 1
		elif type_ == "_RBRACE":
			frame.depth -= 1
		return cur.take(type_, len(value))

	def _lex_template(self, cur: _Cursor, stack: List[_Frame], complete: str, opened: str) -> Token:
		"""Lex from a backtick (or the `}` closing a substitution) to the next backtick or `${`."""
		m = _TEMPLATE_CHUNK_RE.match(cur.text, cur.pos + 1)
		if m is None:
			raise cur.error()
		if m.group(1) == "`":
			return cur.take(complete, m.end() - cur.pos)
		stack.append(_Frame("js", "tpl"))
		return cur.take(opened, m.end() - cur.pos)

	def _lex_tag(self, cur: _Cursor, frame: _Frame, stack: List[_Frame]) -> Optional[Token]:
		space = _JSX_SPACE_RE.match(cur.text, cur.pos)
		if space is not None:
			cur.advance(space.end() - cur.pos)
			return None
		comment = _JSX_COMMENT_RE.match(cur.text, cur.pos)
		if comment is not None:
			return cur.take(comment.lastgroup, comment.end() - cur.pos)

		c = cur.peek()
		if c == "/":
			# `</name>` closes an element; `<name ... />` closes itself.
			frame.kind = "close" if frame.depth == 0 else "self"
			tok = cur.take("_JSX_SLASH", 1)
		elif c == ">":
			stack.pop()
			if frame.kind == "open":
				stack.append(_Frame("children"))
			elif frame.kind == "close":
				stack.pop()
			tok = cur.take("_JSX_GT", 1)
		elif c == "{":
			stack.append(_Frame("js", "jsx"))
			tok = cur.take("_JSX_LBRACE", 1)
		elif c == "<":
			# An element used as an attribute value.
			stack.append(_Frame("tag", "open"))
			tok = cur.take("_JSX_OPEN", 1)
		elif c in _JSX_PUNCT:
			tok = cur.take(_JSX_PUNCT[c], 1)
		else:
			m = _JSX_STRING_RE.match(cur.text, cur.pos) or _JSX_NAME_RE.match(cur.text, cur.pos)
			if m is None:
				raise cur.error()
			tok = cur.take("JSX_STRING" if c in "\"'" else "JSX_NAME", m.end() - cur.pos)
		frame.depth += 1
		return tok

	def _lex_children(self, cur: _Cursor, stack: List[_Frame]) -> Token:
		c = cur.peek()
		if c == "{":
			stack.append(_Frame("js", "jsx"))
			return cur.take("_JSX_LBRACE", 1)
		if c == "<":
			stack.append(_Frame("tag", "open"))
			return cur.take("_JSX_OPEN", 1)
		m = _JSX_TEXT_RE.match(cur.text, cur.pos)
		return cur.take("JSX_TEXT", m.end() - cur.pos)


__all__ = ["EXPR_END", "JsLexer"]
