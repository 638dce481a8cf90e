"""Filesystem-safe base names derived from project titles."""
from __future__ import annotations

import re

FALLBACK_NAME = "_"

_UNSAFE = re.compile(r"[^A-Za-z0-9\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)
_UNDERSCORES = re.compile(r"_+")
_EDGE_UNDERSCORE = re.compile(r"^_|_$")


def sanitize_filename(title: str) -> str:
    name = _UNSAFE.sub("_", title or "")
    name = _WHITESPACE.sub("_", name)
    name = _UNDERSCORES.sub("_", name)
    name = _EDGE_UNDERSCORE.sub("", name)
    return name.lower() or FALLBACK_NAME


def build_filename(title: str, extension: str) -> str:
    if not extension.startswith("."):
        extension = "." + extension
    return sanitize_filename(title) + extension
