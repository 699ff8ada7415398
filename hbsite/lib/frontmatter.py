"""Front matter parsing for page templates.

A page may start with a block of ``key: value`` lines fenced by ``---``:

    ---
    title: About
    layout: master
    ---
    <h1>{{title}}</h1>

Deliberately minimal - no YAML, every value is a plain string.
"""

from __future__ import annotations

import re
from typing import NamedTuple

# Anchored at the very start; the closing fence must be followed by a newline.
_FRONT_MATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*\n(.*)\Z", re.DOTALL)


class FrontMatter(NamedTuple):
    """Parsed front matter and the remaining template body."""

    data: dict[str, str]
    content: str


def parse_front_matter(text: str) -> FrontMatter:
    """Split ``text`` into front matter data and body.

    Each meta line is split at the first colon, so values may contain
    colons (``url: https://example.com``). Lines without a colon are
    skipped.

    Args:
        text: Full template source.

    Returns:
        FrontMatter with the parsed mapping and the body. When there is no
        well-formed leading block the mapping is empty and the body is the
        original text unchanged.

    Example:
        >>> parse_front_matter("---\\ntitle: About\\n---\\n<h1>{{title}}</h1>")
        FrontMatter(data={'title': 'About'}, content='<h1>{{title}}</h1>')
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return FrontMatter(data={}, content=text)

    data: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep or not key:
            continue
        data[key.strip()] = value.strip()

    return FrontMatter(data=data, content=match.group(2))
