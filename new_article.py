#!/usr/bin/env python3
"""
Create a new article file with frontmatter.

The category and source are checked against categories.json and
sources.json. The file is written to
articles/<category>/<YYYY-MM-DD>-<slug>.md under the content root and is
never overwritten.

Usage:
    python new_article.py --title "..." --category technology --sourceUrl "https://..."
                          [--source 9to5google] [--sourceName "..."] [--summary "..."]
                          [--thumbnail "..."] [--publishedAt "2026-02-16T08:10:00Z"]

    python new_article.py Title words technology https://example.com SourceName Summary words
"""

import argparse
import re
import sys
from datetime import datetime, timezone
from pathlib import Path

from build_catalog import DEFAULT_CONTENT_DIR
from front_matter import dump_frontmatter
from sources import (
    Category,
    Source,
    detect_source_from_url,
    find_config,
    is_category_valid,
    is_source_valid,
    load_categories,
    load_sources,
)

UNKNOWN_SOURCE_NAME = 'Unknown Source'
PLACEHOLDER_BODY = 'Write your markdown content here.\n'
SLUG_MAX_LENGTH = 80

DATE_PART_RE = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')

USAGE = (
    'Usage: new_article.py --title "..." --category technology --sourceUrl "https://..." '
    '[--source 9to5google] [--sourceName "..."] [--summary "..."] [--thumbnail "..."] '
    '[--publishedAt "2026-02-16T08:10:00Z"]\n'
    'Or positional: new_article.py "Title words" technology https://example.com SourceName Summary words'
)


class ArticleError(Exception):
    """Raised when the new article cannot be created from the given input."""


def slugify(text: str) -> str:
    """Lowercase, keep [a-z0-9], collapse whitespace and hyphens into single hyphens."""
    slug = text.strip().lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    slug = re.sub(r'^-|-$', '', slug)
    return slug[:SLUG_MAX_LENGTH]


def utc_timestamp() -> str:
    """Current time as 2026-02-16T08:10:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_positional(words: list[str], categories: list[Category]) -> dict[str, str] | None:
    """
    Split `TITLE... CATEGORY SOURCE_URL [SOURCE_NAME] [SUMMARY...]`.

    The category is the first word that is a configured category id; at
    least one title word must precede it and a source URL must follow it.
    """
    allowed = {category.id for category in categories}
    index = next((i for i, word in enumerate(words) if word in allowed), -1)
    if index <= 0 or index >= len(words) - 1:
        return None

    title = ' '.join(words[:index]).strip()
    source_url = words[index + 1].strip()
    if not title or not source_url:
        return None

    source_name = words[index + 2].strip() if len(words) > index + 2 else ''
    return {
        'title': title,
        'category': words[index].strip(),
        'sourceUrl': source_url,
        'sourceName': source_name or UNKNOWN_SOURCE_NAME,
        'summary': ' '.join(words[index + 3:]).strip(),
    }


def article_path(articles_dir: Path, category: str, published_at: str, title: str) -> Path:
    date_part = published_at[:10]
    slug = slugify(title)
    if not DATE_PART_RE.match(date_part) or not slug:
        raise ArticleError('Invalid publishedAt or title for filename generation.')
    return articles_dir / category / f'{date_part}-{slug}.md'


def create_article(
    articles_dir: Path,
    sources: list[Source],
    categories: list[Category],
    *,
    title: str,
    category: str,
    source_url: str,
    source: str | None = None,
    source_name: str | None = None,
    summary: str = '',
    thumbnail: str = '',
    published_at: str | None = None,
) -> Path:
    """Validate the input and write the new article file. Returns its path."""
    if not title or not category or not source_url:
        raise ArticleError(USAGE)

    source_name = source_name or UNKNOWN_SOURCE_NAME
    published_at = published_at or utc_timestamp()
    if not source:
        source = detect_source_from_url(source_url, sources)

    if not is_category_valid(category, categories):
        allowed = ', '.join(c.id for c in categories)
        raise ArticleError(f'Invalid category: {category}\nAllowed categories: {allowed}')

    if not is_source_valid(source, sources):
        allowed = ', '.join(s.id for s in sources)
        raise ArticleError(f'Invalid source: {source}\nAllowed sources: {allowed}')

    output_file = article_path(articles_dir, category, published_at, title)
    if output_file.exists():
        raise ArticleError(f'File already exists: {output_file}')

    meta = {
        'title': title,
        'category': category,
        'source': source,
        'publishedAt': published_at,
        'sourceName': source_name,
        'sourceUrl': source_url,
        'thumbnail': thumbnail,
        'summary': summary,
    }

    output_file.parent.mkdir(parents=True, exist_ok=True)
    # 'x' mode refuses to replace a file created since the check above
    with open(output_file, 'x', encoding='utf-8') as f:
        f.write(dump_frontmatter(meta, '\n' + PLACEHOLDER_BODY))
    return output_file


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='Create a new article markdown file with frontmatter.',
        usage=USAGE,
    )
    parser.add_argument('words', nargs='*', help='TITLE... CATEGORY SOURCE_URL [SOURCE_NAME] [SUMMARY...]')
    parser.add_argument('--title')
    parser.add_argument('--category')
    parser.add_argument('--sourceUrl', dest='source_url')
    parser.add_argument('--source', help='Source id (default: detected from the URL domain)')
    parser.add_argument('--sourceName', dest='source_name')
    parser.add_argument('--summary')
    parser.add_argument('--thumbnail')
    parser.add_argument('--publishedAt', dest='published_at', help='ISO timestamp (default: now, UTC)')
    parser.add_argument(
        '--content-dir',
        type=Path,
        default=DEFAULT_CONTENT_DIR,
        help='Content root holding articles/, sources and categories (default: web/content)',
    )
    args = parser.parse_intermixed_args(argv)

    sources = load_sources(find_config(args.content_dir, 'sources'))
    categories = load_categories(find_config(args.content_dir, 'categories'))
    positional = parse_positional(args.words, categories) or {}

    def pick(value: str | None, key: str) -> str:
        return (value or '').strip() or positional.get(key, '')

    try:
        output_file = create_article(
            args.content_dir / 'articles',
            sources,
            categories,
            title=pick(args.title, 'title'),
            category=pick(args.category, 'category'),
            source_url=pick(args.source_url, 'sourceUrl'),
            source=(args.source or '').strip() or None,
            source_name=pick(args.source_name, 'sourceName'),
            summary=pick(args.summary, 'summary'),
            thumbnail=(args.thumbnail or '').strip(),
            published_at=(args.published_at or '').strip() or None,
        )
    except ArticleError as e:
        print(e, file=sys.stderr)
        return 1

    print(f"Created: {output_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
