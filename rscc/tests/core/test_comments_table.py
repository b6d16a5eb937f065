# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from types import SimpleNamespace

from rscc.core.comments import Comment, CommentKind, Comments
from rscc.core.span import Span


def test_comment_render_uses_kind_delimiters():
	assert Comment(CommentKind.LINE, " hi").render() == "// hi"
	assert Comment(CommentKind.BLOCK, " hi ").render() == "/* hi */"


def test_leading_comments_keep_insertion_order_per_position():
	table = Comments()
	first = Comment(CommentKind.LINE, "a")
	second = Comment(CommentKind.BLOCK, "b")
	table.add_leading(0, first)
	table.add_leading(0, second)
	table.add_leading(10, first)

	assert table.get_leading(0) == [first, second]
	assert table.get_leading(10) == [first]
	assert table.get_leading(5) == []
	assert table.get_leading(None) == []
	assert table.has_leading(0)
	assert table.leading_positions() == [0, 10]


def test_take_leading_removes_entries():
	table = Comments()
	c = Comment(CommentKind.LINE, "x")
	table.add_leading(3, c)
	assert table.take_leading(3) == [c]
	assert not table.has_leading(3)
	assert table.take_leading(3) == []


def test_take_trailing_removes_entries():
	table = Comments()
	c = Comment(CommentKind.BLOCK, "end")
	table.add_trailing(9, c)
	assert table.take_trailing(9) == [c]
	assert table.get_trailing(9) == []
	assert table.take_trailing(9) == []


def test_trailing_comments_are_separate_from_leading():
	table = Comments()
	c = Comment(CommentKind.LINE, "end")
	table.add_trailing(42, c)
	assert table.get_trailing(42) == [c]
	assert table.get_leading(42) == []


def test_span_from_loc_reads_lark_style_positions():
	tok = SimpleNamespace(line=2, column=4, end_line=2, end_column=9, start_pos=11, end_pos=16)
	span = Span.from_loc(tok, file="m.js")
	assert (span.file, span.line, span.column, span.lo, span.hi) == ("m.js", 2, 4, 11, 16)
	assert not span.is_dummy


def test_span_from_loc_empty_meta_is_dummy():
	assert Span.from_loc(SimpleNamespace(empty=True), file="m.js").is_dummy
	assert Span.from_loc(None).is_dummy


def test_span_to_covers_both_ends():
	a = Span(file="m.js", line=1, column=1, end_line=1, end_column=4, lo=0, hi=3)
	b = Span(file="m.js", line=2, column=1, end_line=2, end_column=6, lo=10, hi=15)
	joined = a.to(b)
	assert (joined.lo, joined.hi, joined.line, joined.end_line) == (0, 15, 1, 2)
	assert Span().to(b) is b
