#!/usr/bin/env python3
"""
Build catalog.json from article frontmatter.

Scans all article .md files under the articles directory, parses their
frontmatter, resolves each article's source and writes a catalog with the
sources and categories actually in use.

Usage:
    python build_catalog.py [--content-dir PATH] [--output PATH] [--validate] [--stats]

Options:
    --content-dir PATH  Content root holding articles/, sources.json and categories.json
                        Default: web/content
    --output PATH       Output catalog file path
                        Default: web/dist/catalog.json
"""

import argparse
import json
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from front_matter import parse_frontmatter
from markdown_render import extract_plain_text, markdown_to_html
from sources import (
    OTHER_SOURCE,
    Category,
    Source,
    detect_source_id,
    find_config,
    get_category_name_by_id,
    is_category_valid,
    load_categories,
    load_sources,
    source_label,
)

DEFAULT_CONTENT_DIR = Path('web/content')

EXCERPT_LENGTH = 280

DATE_RE = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}')


@dataclass(frozen=True)
class Article:
    id: str
    path: str
    meta: Mapping[str, str] = field(default_factory=dict, hash=False)
    html: str = ''
    raw: str = ''
    source_id: str = OTHER_SOURCE

    def __post_init__(self):
        object.__setattr__(self, 'meta', MappingProxyType(dict(self.meta)))

    @property
    def title(self) -> str:
        return self.meta.get('title') or self.id


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def list_markdown(root: Path) -> list[Path]:
    """All .md files under root, sorted by path. A missing root yields nothing."""
    if not root.is_dir():
        return []
    return sorted((p for p in root.rglob('*.md') if p.is_file()), key=lambda p: p.as_posix())


def load_article(file_path: Path, articles_dir: Path, sources: list[Source]) -> Article:
    """Parse, render and attribute one article file."""
    content = file_path.read_text(encoding='utf-8')
    meta, body = parse_frontmatter(content)
    return Article(
        id=file_path.stem,
        path=file_path.relative_to(articles_dir).as_posix(),
        meta=meta,
        html=markdown_to_html(body),
        raw=body,
        source_id=detect_source_id(meta, sources),
    )


def load_articles(articles_dir: Path, sources: list[Source]) -> list[Article]:
    articles = []
    for file_path in list_markdown(articles_dir):
        try:
            articles.append(load_article(file_path, articles_dir, sources))
        except (OSError, UnicodeDecodeError) as e:
            print(f"  Warning: Could not read {file_path}: {e}")
    return articles


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def build_catalog(
    articles: list[Article],
    sources: list[Source],
    categories: list[Category],
) -> dict[str, Any]:
    """Metadata index of all articles plus the sources and categories in use."""
    used_sources = {}
    used_categories = {}
    entries = []

    for article in articles:
        meta = article.meta
        label = source_label(article.source_id, meta, sources)
        used_sources.setdefault(article.source_id, label)

        category = meta.get('category')
        if category:
            used_categories.setdefault(category, get_category_name_by_id(category, categories))

        excerpt = extract_plain_text(article.raw)[:EXCERPT_LENGTH]
        entry = {
            'id': article.id,
            'path': article.path,
            'title': article.title,
            'category': category,
            'source': article.source_id,
            'sourceName': label,
            'sourceUrl': meta.get('sourceUrl'),
            'publishedAt': meta.get('publishedAt'),
            'summary': meta.get('summary'),
            'thumbnail': meta.get('thumbnail'),
            'excerpt': excerpt,
        }

        # Remove empty values for cleaner output
        entries.append({k: v for k, v in entry.items() if v})

    return {
        'generated': datetime.now().astimezone().isoformat(),
        'article_count': len(entries),
        'taxonomy': {
            'sources': [{'id': k, 'name': v} for k, v in used_sources.items()],
            'categories': [{'id': k, 'name': v} for k, v in used_categories.items()],
        },
        'articles': entries,
    }


def validate_articles(articles: list[Article], categories: list[Category]) -> list[str]:
    """Check for common frontmatter issues."""
    issues = []

    for article in articles:
        meta = article.meta
        if not meta.get('title'):
            issues.append(f"{article.path}: Missing title")

        category = meta.get('category')
        if not category:
            issues.append(f"{article.path}: Missing category")
        elif not is_category_valid(category, categories):
            issues.append(f"{article.path}: Unknown category: {category}")

        if article.source_id == OTHER_SOURCE:
            issues.append(f"{article.path}: Source not recognized (resolved to '{OTHER_SOURCE}')")

        published = meta.get('publishedAt')
        if not published:
            issues.append(f"{article.path}: Missing publishedAt")
        elif not DATE_RE.match(published):
            issues.append(f"{article.path}: Invalid publishedAt: {published}")

    return issues


def print_stats(catalog: dict) -> None:
    """Print article counts per source and per category."""
    source_counts = {}
    category_counts = {}
    for entry in catalog['articles']:
        source = entry.get('source', OTHER_SOURCE)
        source_counts[source] = source_counts.get(source, 0) + 1
        category = entry.get('category', 'missing')
        category_counts[category] = category_counts.get(category, 0) + 1

    print("\n--- Sources ---")
    for source in sorted(source_counts):
        print(f"  {source}: {source_counts[source]}")

    print("\n--- Categories ---")
    for category in sorted(category_counts):
        print(f"  {category}: {category_counts[category]}")

    print(f"\nTotal articles: {catalog['article_count']}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='Build catalog.json from article frontmatter'
    )
    parser.add_argument(
        '--content-dir',
        type=Path,
        default=DEFAULT_CONTENT_DIR,
        help='Content root holding articles/, sources and categories (default: web/content)'
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=Path('web/dist/catalog.json'),
        help='Output catalog file path'
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        help='Check for frontmatter issues'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print per-source and per-category statistics'
    )

    args = parser.parse_args(argv)

    if not args.content_dir.exists():
        print(f"Error: Content directory not found: {args.content_dir}", file=sys.stderr)
        return 1

    print(f"Content directory: {args.content_dir}")
    print(f"Output file: {args.output}")

    sources = load_sources(find_config(args.content_dir, 'sources'))
    categories = load_categories(find_config(args.content_dir, 'categories'))
    articles = load_articles(args.content_dir / 'articles', sources)
    catalog = build_catalog(articles, sources, categories)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump(catalog, f, indent=2, ensure_ascii=False)

    print(f"\nCatalog written to {args.output}")
    print(f"Total articles: {catalog['article_count']}")

    if args.validate:
        issues = validate_articles(articles, categories)
        if issues:
            print("\n--- Validation Issues ---")
            for issue in issues:
                print(f"  {issue}")
        else:
            print("\nNo validation issues found.")

    if args.stats:
        print_stats(catalog)

    return 0


if __name__ == '__main__':
    sys.exit(main())
