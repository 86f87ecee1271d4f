"""Test grapheme segmentation, widths and visible-range rendering of a line."""

from linepad.line import GraphemeWidth, Line


def test_from_text_counts_graphemes_not_codepoints():
    """A base letter plus combining accent is one grapheme."""
    line = Line.from_text("cafe\u0301")
    assert line.grapheme_count() == 4
    assert len(line) == 4
    assert str(line) == "cafe\u0301"


def test_ascii_fragments_are_half_width():
    line = Line.from_text("abc")
    assert [f.rendered_width for f in line.fragments] == [GraphemeWidth.HALF] * 3
    assert all(f.replacement is None for f in line.fragments)


def test_east_asian_glyph_is_full_width():
    line = Line.from_text("a世b")
    assert [f.rendered_width for f in line.fragments] == [
        GraphemeWidth.HALF, GraphemeWidth.FULL, GraphemeWidth.HALF,
    ]


def test_width_until_sums_rendered_widths():
    line = Line.from_text("a世b")
    assert line.width_until(0) == 0
    assert line.width_until(1) == 1
    assert line.width_until(2) == 3
    assert line.width_until(3) == 4


def test_width_until_past_end_sums_existing_fragments():
    line = Line.from_text("a世b")
    assert line.width_until(100) == 4
    assert line.width_until(line.grapheme_count()) == line.width()


def test_width_until_is_monotonic():
    line = Line.from_text("x\t世界 e\u0301 \u00a0z")
    widths = [line.width_until(i) for i in range(line.grapheme_count() + 2)]
    assert widths == sorted(widths)
    assert line.width_until(line.grapheme_count()) == sum(f.rendered_width for f in line.fragments)


def test_space_has_no_replacement():
    line = Line.from_text(" ")
    assert line.fragments[0].replacement is None
    assert line.get_visible_graphemes(0, 1) == " "


def test_tab_is_displayed_as_single_space():
    line = Line.from_text("\tx")
    fragment = line.fragments[0]
    assert fragment.replacement == " "
    assert fragment.rendered_width == GraphemeWidth.HALF
    assert line.get_visible_graphemes(0, 2) == " x"
    # Storage keeps the tab
    assert str(line) == "\tx"


def test_control_character_is_replaced():
    line = Line.from_text("a\x01b")
    assert line.fragments[1].replacement == "▯"
    assert line.fragments[1].rendered_width == GraphemeWidth.HALF
    assert line.get_visible_graphemes(0, 3) == "a▯b"


def test_non_space_whitespace_gets_visible_marker():
    line = Line.from_text("a\u00a0b")
    assert line.fragments[1].replacement == "␣"
    assert line.get_visible_graphemes(0, 3) == "a␣b"


def test_zero_width_character_is_replaced_with_dot():
    line = Line.from_text("\u200b")
    assert line.fragments[0].replacement == "·"
    assert line.fragments[0].rendered_width == GraphemeWidth.HALF


def test_get_visible_graphemes_full_range():
    assert Line.from_text("a世b").get_visible_graphemes(0, 10) == "a世b"


def test_wide_glyph_cut_by_right_edge_renders_marker():
    """Only one column is left for a two-column glyph."""
    line = Line.from_text("abcd世")
    assert line.get_visible_graphemes(0, 5) == "abcd~"


def test_wide_glyph_cut_by_left_edge_renders_marker():
    line = Line.from_text("a世b")
    assert line.get_visible_graphemes(2, 4) == "~b"


def test_get_visible_graphemes_empty_or_inverted_range():
    line = Line.from_text("hello")
    assert line.get_visible_graphemes(2, 2) == ""
    assert line.get_visible_graphemes(4, 1) == ""


def test_get_visible_graphemes_horizontal_window():
    line = Line.from_text("hello world")
    assert line.get_visible_graphemes(6, 11) == "world"
    assert line.get_visible_graphemes(6, 100) == "world"


def test_insert_char_in_middle_and_end():
    line = Line.from_text("ac")
    line.insert_char("b", 1)
    assert str(line) == "abc"
    line.insert_char("d", 10)
    assert str(line) == "abcd"


def test_insert_combining_mark_merges_into_cluster():
    line = Line.from_text("e")
    line.insert_char("\u0301", 1)
    assert line.grapheme_count() == 1
    assert str(line) == "e\u0301"


def test_delete_removes_whole_cluster():
    line = Line.from_text("ae\u0301b")
    line.delete(1)
    assert str(line) == "ab"


def test_delete_out_of_range_is_ignored():
    line = Line.from_text("ab")
    line.delete(2)
    line.delete(-1)
    assert str(line) == "ab"


def test_append_retokenizes():
    line = Line.from_text("ab")
    line.append(Line.from_text("世"))
    assert str(line) == "ab世"
    assert line.width() == 4


def test_split_returns_remainder():
    line = Line.from_text("hello")
    rest = line.split(2)
    assert str(line) == "he"
    assert str(rest) == "llo"


def test_split_at_end_returns_empty_line():
    line = Line.from_text("hi")
    rest = line.split(5)
    assert str(line) == "hi"
    assert rest.grapheme_count() == 0


def test_wide_whitespace_keeps_full_width():
    """An ideographic space occupies two cells and its marker fills both."""
    line = Line.from_text("\u3000x")
    fragment = line.fragments[0]
    assert fragment.rendered_width == GraphemeWidth.FULL
    assert fragment.replacement == "␣"
    assert line.width_until(1) == 2
    assert line.get_visible_graphemes(0, 3) == "␣ x"


def test_wide_whitespace_cut_by_edge_renders_marker():
    line = Line.from_text("a\u3000")
    assert line.get_visible_graphemes(0, 2) == "a~"
