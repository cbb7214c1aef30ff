#!/usr/bin/env python3
"""
Split article files into frontmatter metadata and markdown body.

Articles start with an optional block of `key: value` lines between two
`---` delimiter lines:

    ---
    title: "Pixel 10 leaks"
    category: "technology"
    sourceUrl: "https://9to5google.com/x"
    ---

    Body text...

Values are flat strings. Lines that are not `key: value` are skipped.
"""

import re

DELIMITER = '---'

FIELD_RE = re.compile(r'^([A-Za-z0-9_\-]+):\s*(.*)$')


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def _clean_value(value: str) -> str:
    """Strip surrounding double quotes (one on each side) from a raw value."""
    value = value.strip()
    quoted = len(value) >= 2 and value.startswith('"') and value.endswith('"')
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    if quoted:
        value = value.replace('\\"', '"')
    return value


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """
    Return (meta, body) for a document.

    Without an opening and a closing delimiter line the metadata is empty
    and the body is the text unchanged.
    """
    lines = text.split('\n')
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    end_idx = next((i for i in range(1, len(lines)) if _is_delimiter(lines[i])), None)
    if end_idx is None:
        return {}, text

    meta = {}
    for line in lines[1:end_idx]:
        match = FIELD_RE.match(line.rstrip('\r'))
        if match:
            meta[match.group(1)] = _clean_value(match.group(2))

    body = '\n'.join(lines[end_idx + 1:])
    return meta, body


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '\\"') + '"'


def dump_frontmatter(meta: dict[str, str], body: str = '') -> str:
    """Serialize meta as a frontmatter block followed by body."""
    lines = [DELIMITER]
    lines.extend(f'{key}: {_quote(value)}' for key, value in meta.items())
    lines.append(DELIMITER)
    return '\n'.join(lines) + '\n' + body
