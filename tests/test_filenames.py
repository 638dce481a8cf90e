import re

from writeup_export.export.filenames import build_filename, sanitize_filename


def test_punctuation_and_spaces_become_single_underscores():
    assert sanitize_filename("A/B Test: Report #1!") == "a_b_test_report_1"


def test_simple_title():
    assert sanitize_filename("My Report") == "my_report"


def test_titles_without_alphanumerics_fall_back():
    for title in ["", "!!!", "   ", "___", "¿¡?"]:
        assert sanitize_filename(title) == "_"


def test_non_ascii_letters_are_replaced():
    assert sanitize_filename("Café Überblick") == "caf_berblick"


def test_sanitize_is_idempotent_and_restricted():
    titles = ["A/B Test: Report #1!", "  leading and trailing  ", "Mixed_Case__Name", "数据 report 2024", "?"]
    for title in titles:
        once = sanitize_filename(title)
        assert sanitize_filename(once) == once
        assert re.fullmatch(r"[a-z0-9_]+", once)


def test_build_filename_appends_extension():
    assert build_filename("My Report", ".pdf") == "my_report.pdf"
    assert build_filename("My Report", "txt") == "my_report.txt"
