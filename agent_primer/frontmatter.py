"""
Front matter splitting for primitive markdown files.

A primitive file may start with a YAML block fenced by ``---`` lines:

    ---
    name: my-skill
    description: What it does
    ---
    # Body text...

Only a block at the very top of the file counts.  A missing block means "no
front matter"; an unterminated one runs to the end of the file, leaving an
empty body.  Malformed YAML raises ``yaml.YAMLError`` and the caller decides
whether that is fatal.
"""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[Any, str]:
    """Return ``(data, body)`` for a markdown document.

    ``data`` is whatever the YAML block parses to (``{}`` when the block is
    absent or empty); it is not validated here.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != DELIMITER:
        return {}, text

    # Without a closing fence the rest of the file is the block.
    end = len(lines)
    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n").rstrip() == DELIMITER:
            end = index
            break

    block = "".join(lines[1:end])
    body = "".join(lines[end + 1:])
    data = yaml.safe_load(block) if block.strip() else None
    return ({} if data is None else data), body
