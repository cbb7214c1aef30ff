#!/usr/bin/env python3
"""
Source and category configuration, and source resolution for articles.

Both configuration files are lists of records:

    sources.json     [{"id": "9to5google", "name": "9to5Google", "domains": ["9to5google.com"]}, ...]
    categories.json  [{"id": "technology", "name": "Technology"}, ...]

YAML files (`sources.yaml`, `categories.yml`, ...) with the same structure
are accepted too.

An article's source is resolved to exactly one configured source id, or to
OTHER_SOURCE when nothing matches.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

OTHER_SOURCE = 'other'

CONFIG_SUFFIXES = ('.json', '.yaml', '.yml')


@dataclass(frozen=True)
class Source:
    id: str
    name: str
    domains: tuple[str, ...] = ()


@dataclass(frozen=True)
class Category:
    id: str
    name: str


# ---------------------------------------------------------------------------
# Configuration loading
# ---------------------------------------------------------------------------

def find_config(content_dir: Path, stem: str) -> Path:
    """Return the first existing `stem.json|yaml|yml` under content_dir."""
    for suffix in CONFIG_SUFFIXES:
        candidate = content_dir / f'{stem}{suffix}'
        if candidate.exists():
            return candidate
    return content_dir / f'{stem}.json'


def load_records(path: Path) -> list[dict[str, Any]]:
    """
    Read a list-of-records file.

    Missing, unreadable or malformed files give an empty list so a build
    can still go ahead.
    """
    if not path.exists():
        return []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"  Warning: Could not load {path}: {e}")
        return []

    if not isinstance(data, list):
        print(f"  Warning: Expected a list of records in {path}")
        return []

    return [item for item in data if isinstance(item, dict)]


def load_sources(path: Path) -> list[Source]:
    """Load sources, skipping records without an id and repeated ids."""
    sources = []
    seen = set()
    for record in load_records(path):
        source_id = str(record.get('id') or '').strip()
        if not source_id:
            print(f"  Warning: Source without id in {path}: {record}")
            continue
        if source_id in seen:
            print(f"  Warning: Duplicate source id '{source_id}' in {path}")
            continue
        seen.add(source_id)

        domains = record.get('domains') or []
        if isinstance(domains, str):
            domains = [domains]
        sources.append(Source(
            id=source_id,
            name=str(record.get('name') or source_id),
            domains=tuple(str(d).strip().lower() for d in domains if str(d).strip()),
        ))
    return sources


def load_categories(path: Path) -> list[Category]:
    categories = []
    seen = set()
    for record in load_records(path):
        category_id = str(record.get('id') or '').strip()
        if not category_id or category_id in seen:
            print(f"  Warning: Skipping category record in {path}: {record}")
            continue
        seen.add(category_id)
        categories.append(Category(id=category_id, name=str(record.get('name') or category_id)))
    return categories


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def index_sources(sources: list[Source]) -> dict[str, Source]:
    return {source.id: source for source in sources}


def is_source_valid(source_id: str, sources: list[Source]) -> bool:
    return any(source.id == source_id for source in sources)


def get_source_name_by_id(source_id: str, sources: list[Source]) -> str:
    source = index_sources(sources).get(source_id)
    return source.name if source else source_id


def is_category_valid(category_id: str, categories: list[Category]) -> bool:
    return any(category.id == category_id for category in categories)


def get_category_name_by_id(category_id: str, categories: list[Category]) -> str:
    for category in categories:
        if category.id == category_id:
            return category.name
    return category_id


def default_category(categories: list[Category]) -> str | None:
    """First configured category id, or None without categories."""
    return categories[0].id if categories else None


def source_label(source_id: str, meta: dict[str, str], sources: list[Source]) -> str:
    """Display name for an article's source: configured name, then sourceName, then the id."""
    source = index_sources(sources).get(source_id)
    if source and source.name:
        return source.name
    if meta.get('sourceName'):
        return meta['sourceName']
    return source_id


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _normalize(value: str | None) -> str:
    return (value or '').strip().lower()


def hostname_of(url: str | None) -> str:
    """Lowercase hostname of an absolute URL, or '' when it does not parse."""
    try:
        parsed = urlparse((url or '').strip())
        host = parsed.hostname or ''
    except ValueError:
        return ''
    if not parsed.scheme or not host:
        return ''
    return host.lower()


def match_source_by_domain(url: str | None, sources: list[Source]) -> Source | None:
    """First source (in configuration order) owning the URL's host or a parent domain of it."""
    host = hostname_of(url)
    if not host:
        return None
    for source in sources:
        if any(host == domain or host.endswith(f'.{domain}') for domain in source.domains):
            return source
    return None


def detect_source_from_url(url: str | None, sources: list[Source]) -> str:
    """Source id owning the URL's domain, or OTHER_SOURCE."""
    matched = match_source_by_domain(url, sources)
    return matched.id if matched else OTHER_SOURCE


def detect_source_id(meta: dict[str, str], sources: list[Source]) -> str:
    """
    Resolve the source of a built article.

    Order: declared `source` id, then `sourceUrl` domain, then OTHER_SOURCE.
    """
    raw_source = _normalize(meta.get('source'))
    if raw_source and raw_source in index_sources(sources):
        return raw_source

    matched = match_source_by_domain(meta.get('sourceUrl'), sources)
    if matched:
        return matched.id

    return OTHER_SOURCE


def detect_source_id_with_name(
    frontmatter_source: str | None,
    source_url: str | None,
    source_name: str | None,
    sources: list[Source],
) -> str:
    """
    Resolve a source id falling back to the publisher name.

    Order: declared id, URL domain, case-insensitive display name, then
    OTHER_SOURCE.
    """
    raw_source = _normalize(frontmatter_source)
    if raw_source and raw_source in index_sources(sources):
        return raw_source

    matched = match_source_by_domain(source_url, sources)
    if matched:
        return matched.id

    name = _normalize(source_name)
    if name:
        for source in sources:
            if _normalize(source.name) == name:
                return source.id

    return OTHER_SOURCE
