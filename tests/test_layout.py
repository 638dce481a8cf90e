from writeup_export.export.layout import (
    BODY_SIZE,
    HEADING_SIZE,
    PageGeometry,
    layout_project,
    measure_and_wrap,
    text_width,
)


def headings(plan):
    return [line.text for line in plan.lines() if line.size == HEADING_SIZE]


def test_default_geometry_is_a4_with_20mm_margins(config):
    geometry = PageGeometry.from_config(config)
    assert round(geometry.width) == 210
    assert round(geometry.height) == 297
    assert geometry.margin == 20


def test_title_page_holds_metadata_only(make_project, config):
    project = make_project(sections=[("Intro", "Hello world.")])
    plan = layout_project(project, config)

    title_page = [line.text for line in plan.pages[0].lines]
    assert title_page[0] == "My Report"
    assert "Created: 3/5/2024" in title_page
    assert "Word Count: 1,234" in title_page
    assert "Pages: 5" in title_page
    assert "Target Length: medium" in title_page
    assert len(plan.pages[0].rules) == 1
    assert all(line.size != HEADING_SIZE for line in plan.pages[0].lines)

    second = plan.pages[1].lines
    assert second[0].text == "1. Intro"
    assert second[0].y == config.page.margin_mm


def test_numbering_is_positional_and_skips_empty_sections(three_sections, config):
    plan = layout_project(three_sections, config)
    assert headings(plan) == ["1. Introduction", "3. Findings"]


def test_all_empty_sections_produce_title_and_blank_content_page(make_project, config):
    project = make_project(sections=[("One", ""), ("Two", "  \n ")])
    plan = layout_project(project, config)
    assert plan.page_count == 2
    assert headings(plan) == []
    assert plan.pages[1].items == []


def test_wrap_breaks_only_between_words_within_width(config):
    geometry = PageGeometry.from_config(config)
    words = ("lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod " * 12).split()
    paragraph = " ".join(words)

    lines = measure_and_wrap(paragraph, "Helvetica", BODY_SIZE, geometry.content_width)

    assert len(lines) > 1
    assert " ".join(lines).split() == words
    for line in lines:
        assert text_width(line, "Helvetica", BODY_SIZE) <= geometry.content_width
        assert line == line.strip()


def test_wrap_keeps_hard_line_breaks():
    assert measure_and_wrap("• one\n• two", "Helvetica", BODY_SIZE, 170) == ["• one", "• two"]


def test_overlong_word_is_not_split():
    word = "x" * 400
    assert measure_and_wrap(f"a {word} b", "Helvetica", BODY_SIZE, 50) == ["a", word, "b"]


def test_long_section_breaks_onto_exactly_one_new_page(make_project, config):
    paragraphs = [f"Paragraph line {index}" for index in range(30)]
    project = make_project(sections=[("Long", "\n\n".join(paragraphs))])
    plan = layout_project(project, config)

    content_pages = plan.pages[1:]
    assert len(content_pages) == 2
    body = [line.text for page in content_pages for line in page.lines if line.size == BODY_SIZE]
    assert body == paragraphs
    assert content_pages[0].lines[0].text == "1. Long"
    assert content_pages[1].lines[0].y == config.page.margin_mm

    limit = plan.geometry.bottom_limit
    for page in plan.pages:
        for line in page.lines:
            assert line.y <= limit


def test_each_render_has_independent_state(three_sections, config):
    first = layout_project(three_sections, config)
    second = layout_project(three_sections, config)
    assert first.pages is not second.pages
    assert [p.items for p in first.pages] == [p.items for p in second.pages]
