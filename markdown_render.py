#!/usr/bin/env python3
"""
Markdown-to-HTML converter for article bodies.

Handles the small subset of markdown used in news articles: `#`/`##`/`###`
headings, `-`/`*` unordered list items, standalone image lines, paragraphs
(consecutive lines are joined), and inline images, links, bold and italic.
Anything else (ordered lists, blockquotes, code, tables) is rendered as
paragraph text.
"""

import html
import re

HEADING_RE = re.compile(r'^(#{1,3})\s+(.*)$')
LIST_ITEM_RE = re.compile(r'^\s*[-*]\s+(.*)$')
IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
BOLD_RE = re.compile(r'\*\*(.+?)\*\*')
ITALIC_RE = re.compile(r'\*(.+?)\*')
TAG_RE = re.compile(r'<[^>]+>')
STASHED_RE = re.compile(r'\x00(\d+)\x00')


def escape(text: str) -> str:
    """Escape &, <, >, and both quote characters."""
    return html.escape(text, quote=True)


def _image_tag(alt: str, src: str) -> str:
    return f'<img src="{src}" alt="{alt}" style="max-width:100%"/>'


def render_inline(text: str) -> str:
    """Apply inline formatting (images, links, bold, italic) after HTML-escaping."""
    text = escape(text).replace('\x00', '')
    text = IMAGE_RE.sub(lambda m: _image_tag(m.group(1), m.group(2)), text)
    text = LINK_RE.sub(
        r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>', text
    )

    # Text is escaped, so every tag here is generated; keep them (and their
    # attribute values) out of reach of the emphasis patterns
    tags = []

    def stash(match):
        tags.append(match.group(0))
        return f'\x00{len(tags) - 1}\x00'

    text = TAG_RE.sub(stash, text)
    # Bold must come before italic so **bold** is not eaten by *italic* regex
    text = BOLD_RE.sub(r'<strong>\1</strong>', text)
    text = ITALIC_RE.sub(r'<em>\1</em>', text)
    return STASHED_RE.sub(lambda m: tags[int(m.group(1))], text)


def _starts_block(line: str) -> bool:
    return bool(HEADING_RE.match(line) or LIST_ITEM_RE.match(line))


def markdown_to_html(md: str) -> str:
    """Convert an article body to an HTML fragment in a single pass over its lines."""
    lines = md.replace('\r', '').split('\n')
    out = []
    in_list = False

    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1

        if not line.strip():
            if in_list:
                out.append('</ul>')
                in_list = False
            continue

        heading = HEADING_RE.match(line)
        if heading:
            if in_list:
                out.append('</ul>')
                in_list = False
            level = len(heading.group(1))
            out.append(f'<h{level}>{render_inline(heading.group(2))}</h{level}>')
            continue

        item = LIST_ITEM_RE.match(line)
        if item:
            if not in_list:
                out.append('<ul>')
                in_list = True
            out.append(f'<li>{render_inline(item.group(1))}</li>')
            continue

        image = IMAGE_RE.fullmatch(line.strip())
        if image:
            if in_list:
                out.append('</ul>')
                in_list = False
            out.append(f'<p>{_image_tag(escape(image.group(1)), escape(image.group(2)))}</p>')
            continue

        # Paragraph: swallow following lines up to a blank line or a new block
        para = [line.strip()]
        while i < len(lines) and lines[i].strip() and not _starts_block(lines[i]):
            para.append(lines[i].strip())
            i += 1
        if in_list:
            out.append('</ul>')
            in_list = False
        out.append(f'<p>{render_inline(" ".join(para))}</p>')

    if in_list:
        out.append('</ul>')

    return ''.join(out)


def extract_plain_text(md_body: str) -> str:
    """Strip markdown formatting from body text, returning plain text for search indexing."""
    result = []
    for line in md_body.replace('\r', '').split('\n'):
        line = re.sub(r'^#{1,6}\s+', '', line)
        line = re.sub(r'^\s*[-*]\s+', '', line)
        line = IMAGE_RE.sub(r'\1', line)
        line = LINK_RE.sub(r'\1', line)
        line = BOLD_RE.sub(r'\1', line)
        line = ITALIC_RE.sub(r'\1', line)
        stripped = line.strip()
        if stripped:
            result.append(stripped)
    return ' '.join(result)
