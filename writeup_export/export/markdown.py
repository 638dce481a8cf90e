"""Markdown to plain-text normalization shared by every export format."""
from __future__ import annotations

import re
from typing import List, Pattern, Tuple

PARAGRAPH_SEPARATOR = "\n\n"

# Applied top to bottom. The passes do not commute: italics must run after
# bold so ``**x**`` is not read as two empty italics, and the bullet pass
# must run after italics have consumed any paired ``*`` on the line.
_PASSES: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE), ""),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE), "• "),
    (re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), PARAGRAPH_SEPARATOR),
)


def normalize(text: str) -> str:
    """Strip the supported markdown subset down to plain inline text."""
    result = (text or "").replace("\r\n", "\n")
    for pattern, replacement in _PASSES:
        result = pattern.sub(replacement, result)
    return result.strip()


def split_paragraphs(text: str) -> List[str]:
    """Split normalized text into non-empty paragraphs, in reading order."""
    return [part.strip() for part in text.split(PARAGRAPH_SEPARATOR) if part.strip()]


def normalized_paragraphs(text: str) -> List[str]:
    return split_paragraphs(normalize(text))
