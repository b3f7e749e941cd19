import pytest

from resume_layout.blocks import ALIGN_CENTER, ALIGN_RIGHT, BlockRenderer
from resume_layout.geometry import FontSpec, PageGeometry, WEIGHT_BOLD
from resume_layout.state import PageState
from resume_layout.surface import LayoutDocument, Rule, TextRun

FONT = FontSpec(10)
LINE = 10 * 1.25 * 0.352778

# 60mm tall page: content runs from y=20 to y=58
SHORT_PAGE = PageGeometry(page_height=60)


def make_renderer(measurer, geometry=SHORT_PAGE, strict=False):
    surface = LayoutDocument(geometry.page_width, geometry.page_height)
    state = PageState(geometry, surface)
    return BlockRenderer(state, measurer, strict_line_breaks=strict)


def three_lines():
    # three 100mm words: one per line at max_width=120
    return "a" * 100 + " " + "b" * 100 + " " + "c" * 100


def test_draw_text_advances_cursor(measurer):
    r = make_renderer(measurer)
    height = r.draw_text("hello", 10, FONT)
    assert height == pytest.approx(LINE)
    assert r.state.cursor_y == pytest.approx(20 + LINE)
    run = r.state.surface.page(1).ops[0]
    assert run == TextRun(10, 20, "hello", 10, "normal")


def test_block_moves_whole_to_next_page(measurer):
    r = make_renderer(measurer)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 50
    height = r.draw_text(three_lines(), 10, FONT, max_width=120)

    assert height == pytest.approx(3 * LINE)
    assert r.state.page_index == 2
    assert r.state.cursor_y == pytest.approx(20 + 3 * LINE)
    assert r.last_block.page_break
    assert [op.y for op in r.state.surface.page(2).ops] == pytest.approx([20, 20 + LINE, 20 + 2 * LINE])


def test_no_break_on_an_empty_page(measurer):
    r = make_renderer(measurer)
    r.draw_text(" ".join(["x" * 100] * 12), 10, FONT, max_width=120)
    assert r.state.page_index == 1
    assert not r.last_block.page_break


def test_strict_mode_splits_paragraph(measurer):
    r = make_renderer(measurer, strict=True)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 50
    r.draw_text(three_lines(), 10, FONT, max_width=120)

    assert [op.text[0] for op in r.state.surface.page(1).ops] == ["f", "a"]
    page2 = r.state.surface.page(2).ops
    assert [op.y for op in page2] == pytest.approx([20, 20 + LINE])
    assert r.state.cursor_y == pytest.approx(20 + 2 * LINE)
    for op in r.state.surface.page(1).ops:
        assert op.y + LINE <= SHORT_PAGE.content_bottom


def test_alignment(measurer):
    r = make_renderer(measurer)
    r.draw_text("abcd", 10, FONT, align=ALIGN_CENTER)
    r.draw_text("abcd", 10, FONT, align=ALIGN_RIGHT)
    centered, right = r.state.surface.page(1).ops
    assert centered.x == pytest.approx(105 - 2)
    assert right.x == pytest.approx(200 - 4)


def test_section_title(measurer):
    r = make_renderer(measurer, geometry=PageGeometry())
    title_font = r.geometry.fonts.section_title
    title_line = title_font.size * 1.25 * 0.352778

    height = r.draw_section_title("skills")

    text, rule = r.state.surface.page(1).ops
    assert text.text == "SKILLS"
    assert text.weight == WEIGHT_BOLD
    assert text.y == pytest.approx(23)
    assert isinstance(rule, Rule)
    assert rule.y1 == pytest.approx(23 + title_line - 3.5)
    assert (rule.x1, rule.x2) == (10, 200)
    assert height == pytest.approx(3 + title_line + 1.5 + 1.5)
    assert r.state.cursor_y == pytest.approx(20 + height)


def test_inline_pair_shares_a_line(measurer):
    r = make_renderer(measurer, geometry=PageGeometry())
    body = r.geometry.fonts.body

    height = r.draw_inline_pair("Languages: ", "Python, Go", FontSpec(body.size, WEIGHT_BOLD), body)

    label, value = r.state.surface.page(1).ops
    assert label.y == value.y == 20
    assert label.weight == WEIGHT_BOLD and value.weight == "normal"
    assert value.x == pytest.approx(10 + len("Languages: "))
    assert height == pytest.approx(body.size * 1.25 * 0.352778)
    assert r.state.cursor_y == pytest.approx(20 + height)


def test_ensure_space_keeps_group_together(measurer):
    r = make_renderer(measurer)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 45
    assert r.ensure_space(20)
    assert r.state.page_index == 2


def test_ensure_space_does_not_break_for_oversized_group(measurer):
    r = make_renderer(measurer)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 45
    # 100mm never fits a 38mm page; 5mm still fits here
    assert not r.ensure_space(100, minimum=5)
    assert r.ensure_space(100, minimum=20)


def tall_value():
    # twelve 100mm words: 12 lines at the value column width, taller than SHORT_PAGE
    return " ".join(["x" * 100] * 12)


def test_inline_pair_taller_than_page_stays_with_label(measurer):
    r = make_renderer(measurer)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 45

    r.draw_inline_pair("Langs: ", tall_value(), FontSpec(10, WEIGHT_BOLD), FONT)

    label, value = r.state.surface.blocks[-2:]
    assert (label.page, label.y) == (value.page, value.y) == (2, 20)
    assert r.state.surface.page_count == 2


def test_inline_pair_on_fresh_page_does_not_break(measurer):
    r = make_renderer(measurer)
    r.draw_inline_pair("Langs: ", tall_value(), FontSpec(10, WEIGHT_BOLD), FONT)

    label, value = r.state.surface.blocks[-2:]
    assert (label.page, label.y) == (value.page, value.y) == (1, 20)
    assert r.state.surface.page_count == 1


def test_strict_inline_pair_continues_value_on_next_page(measurer):
    r = make_renderer(measurer, strict=True)
    r.draw_text("first", 10, FONT)
    r.state.cursor_y = 45

    r.draw_inline_pair("Langs: ", tall_value(), FontSpec(10, WEIGHT_BOLD), FONT)

    label, value = r.state.surface.blocks[-2:]
    assert (label.page, label.y) == (value.page, value.y) == (1, 45)
    assert r.state.page_index > 1
