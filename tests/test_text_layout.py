from pyrte.services.text_layout import PageGeometry, page_count, paginate, wrap_lines


def char_width(s: str) -> float:
    """Monospace measure: every character is 1 unit wide."""
    return float(len(s))


def test_short_lines_are_kept():
    assert wrap_lines("hello world", 20, char_width) == ["hello world"]


def test_wraps_on_word_boundaries():
    assert wrap_lines("aaa bbb ccc", 7, char_width) == ["aaa bbb", "ccc"]


def test_hard_breaks_and_empty_lines_are_preserved():
    assert wrap_lines("a\n\nb", 10, char_width) == ["a", "", "b"]


def test_crlf_is_a_single_break():
    assert wrap_lines("a\r\nb", 10, char_width) == ["a", "b"]


def test_long_word_is_broken_by_characters():
    out = wrap_lines("x abcdefghij y", 4, char_width)
    assert out == ["x", "abcd", "efgh", "ij y"]
    assert all(char_width(line) <= 4 for line in out)


def test_paginate_starts_new_page_before_bottom_margin():
    g = PageGeometry(width=100, height=100, margin=10, line_height=20)
    placed = paginate(["l%d" % i for i in range(6)], g)
    # y = 10, 30, 50, 70 fit (70 + 20 <= 90); 90 + 20 > 90 starts a new page
    assert [(p.page, p.y) for p in placed] == [
        (0, 10),
        (0, 30),
        (0, 50),
        (0, 70),
        (1, 10),
        (1, 30),
    ]
    assert page_count(placed) == 2


def test_baseline_sits_one_ascent_below_the_line_top():
    g = PageGeometry(width=100, height=100, margin=10, line_height=20)
    placed = paginate(["l%d" % i for i in range(6)], g, ascent=15)
    assert [(p.page, p.y) for p in placed] == [
        (0, 25),
        (0, 45),
        (0, 65),
        (0, 85),
        (1, 25),
        (1, 45),
    ]


def test_every_line_stays_inside_the_margins():
    g = PageGeometry()
    ascent, descent = 10.0, 3.0
    text = "\n".join("line %d with some words" % i for i in range(200))
    lines = wrap_lines(text, g.max_width, lambda s: len(s) * 5.5)
    placed = paginate(lines, g, ascent=ascent)
    assert page_count(placed) > 1
    for p in placed:
        assert p.x == g.margin
        assert g.margin <= p.y - ascent
        assert p.y + descent <= g.height - g.margin


def test_a4_geometry():
    g = PageGeometry()
    assert (g.width, g.height, g.margin, g.line_height) == (595.28, 841.89, 48.0, 14.0)
    assert g.max_width == 595.28 - 96


def test_empty_text_is_a_single_empty_line():
    assert wrap_lines("", 100, char_width) == [""]
    assert page_count(paginate([])) == 1
