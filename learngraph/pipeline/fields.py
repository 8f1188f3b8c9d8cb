"""
Field parsing helpers for catalog rows.

Catalog cells use two conventions:
- multi-value fields: "A | B, C" -> ["A", "B", "C"]
- hierarchical fields: "Math > Algebra | Art" -> [["Math", "Algebra"], ["Art"]]
"""

import re

ENTRY_DELIMITER = "|"
VALUE_DELIMITER = ","
PATH_DELIMITER = ">"

_NON_SLUG_CHARS = re.compile(r'[^a-z0-9]+')


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim leading/trailing '-'."""
    return _NON_SLUG_CHARS.sub('-', value.lower()).strip('-')


def split_multi_field(value: str | None) -> list[str]:
    """Split a multi-value cell on '|' then ',' dropping empty tokens."""
    if not value:
        return []
    tokens = []
    for chunk in value.split(ENTRY_DELIMITER):
        for item in chunk.split(VALUE_DELIMITER):
            item = item.strip()
            if item:
                tokens.append(item)
    return tokens


def parse_hierarchy_field(value: str | None) -> list[list[str]]:
    """
    Split a hierarchical cell into tag paths.

    Entries are separated by '|', segments by '>'. Empty segments are dropped,
    and entries left with no segments are dropped entirely.
    """
    if not value:
        return []
    paths = []
    for entry in value.split(ENTRY_DELIMITER):
        segments = [s.strip() for s in entry.split(PATH_DELIMITER)]
        segments = [s for s in segments if s]
        if segments:
            paths.append(segments)
    return paths


def join_path(segments: list[str]) -> str:
    return PATH_DELIMITER.join(segments)


def path_prefixes(segments: list[str]) -> list[str]:
    """Every non-empty prefix of a tag path, joined: [A, B] -> ["A", "A>B"]."""
    return [join_path(segments[:i + 1]) for i in range(len(segments))]
