#!/usr/bin/env python3
"""
Build the static news page from markdown article files.

Generates a single self-contained page (styles and filtering script
embedded) that can be served from any web server, GitHub Pages, or even
file://.

Usage:
    python build_site.py [--content-dir PATH] [--output PATH] [--title TEXT]

Produces:
    web/dist/
      index.html   - every article, with source/category/search filters
      404.html     - static not-found page
"""

import argparse
import re
import sys
import time
from pathlib import Path

from build_catalog import DEFAULT_CONTENT_DIR, Article, load_articles
from markdown_render import escape
from sources import (
    Category,
    Source,
    find_config,
    get_category_name_by_id,
    load_categories,
    load_sources,
    source_label,
)

DEFAULT_SITE_TITLE = 'News Fusion'


# ---------------------------------------------------------------------------
# Filter options
# ---------------------------------------------------------------------------

def _options(used_ids: list[str], configured: list[Source] | list[Category]) -> list[dict[str, str]]:
    """Configured entries in use (configuration order), then unconfigured ids labelled by themselves."""
    used = set(used_ids)
    known = {item.id for item in configured}
    options = [{'value': item.id, 'label': item.name} for item in configured if item.id in used]
    options.extend({'value': value, 'label': value} for value in used_ids if value not in known)
    return options


def build_source_options(source_ids: list[str], sources: list[Source]) -> list[dict[str, str]]:
    return _options(list(dict.fromkeys(source_ids)), sources)


def build_category_options(articles: list[Article], categories: list[Category]) -> list[dict[str, str]]:
    used = [a.meta['category'] for a in articles if a.meta.get('category')]
    return _options(list(dict.fromkeys(used)), categories)


def _render_options(options: list[dict[str, str]]) -> str:
    return ''.join(
        f'<option value="{escape(o["value"])}">{escape(o["label"])}</option>' for o in options
    )


# ---------------------------------------------------------------------------
# Article fragments
# ---------------------------------------------------------------------------

def render_article_item(article: Article, sources: list[Source], categories: list[Category]) -> str:
    """One list item: title, source label and date line, and the rendered body."""
    meta = article.meta
    category = meta.get('category', '')
    info = f"{escape(source_label(article.source_id, meta, sources))} · {escape(meta.get('publishedAt', ''))}"
    if category:
        info += f" · {escape(get_category_name_by_id(category, categories))}"
    if meta.get('sourceUrl'):
        info += (
            f' · <a href="{escape(meta["sourceUrl"])}" target="_blank" '
            f'rel="noopener noreferrer">Original</a>'
        )

    return (
        f'<div class="item" data-source="{escape(article.source_id)}" data-category="{escape(category)}">\n'
        f'      <h2>{escape(article.title)}</h2>\n'
        f'      <p class="meta">{info}</p>\n'
        f'      <div class="content">{article.html}</div>\n'
        f'      </div>'
    )


# ---------------------------------------------------------------------------
# Page template
# ---------------------------------------------------------------------------

PAGE_TEMPLATE = r'''<!doctype html>
<html lang="zh-Hant">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>{SITE_TITLE}</title>
  <style>
    body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial;background:#f8fafc;color:#0f172a;padding:24px}
    .item{border-bottom:1px solid #e6e6e6;padding:12px 0}
    .meta{color:#64748b}
    img{max-width:100%}
    .controls{display:flex;gap:8px;align-items:center;margin-bottom:12px}
    .search{flex:1}
  </style>
</head>
<body>
  <h1>{SITE_TITLE}</h1>
  <div class="controls">
    <select id="sourceSelect"><option value="all">All sources</option>{SOURCE_OPTIONS}</select>
    <select id="categorySelect"><option value="all">All categories</option>{CATEGORY_OPTIONS}</select>
    <input id="q" class="search" placeholder="Search..." />
    <button id="refresh" onclick="location.reload()">Refresh</button>
  </div>
  <div id="count"></div>
  <div id="list">
    {ARTICLES}
  </div>
  <script>
    const list = document.getElementById('list');
    const items = Array.from(list.children);
    const q = document.getElementById('q');
    const source = document.getElementById('sourceSelect');
    const category = document.getElementById('categorySelect');
    function update(){
      const qs = q.value.trim().toLowerCase();
      const sv = source.value;
      const cv = category.value;
      let visible = 0;
      for(const it of items){
        const text = it.innerText.toLowerCase();
        const s = it.getAttribute('data-source');
        const c = it.getAttribute('data-category');
        const match = (sv==='all' || s===sv) && (cv==='all' || c===cv) && (qs==='' || text.includes(qs));
        it.style.display = match ? '' : 'none';
        if(match) visible++;
      }
      document.getElementById('count').innerText = visible + ' articles';
    }
    q.addEventListener('input', update);
    source.addEventListener('change', update);
    category.addEventListener('change', update);
    update();
  </script>
</body>
</html>
'''

NOT_FOUND_HTML = '<!doctype html><meta charset="utf-8"><title>404</title><h1>404</h1><p>Not found</p>'

PLACEHOLDER_RE = re.compile(r'\{(SITE_TITLE|SOURCE_OPTIONS|CATEGORY_OPTIONS|ARTICLES)\}')


def render_page(
    articles: list[Article],
    sources: list[Source],
    categories: list[Category],
    site_title: str = DEFAULT_SITE_TITLE,
) -> str:
    """Assemble the complete index.html document."""
    source_options = build_source_options([a.source_id for a in articles], sources)
    category_options = build_category_options(articles, categories)
    items = '\n'.join(render_article_item(a, sources, categories) for a in articles)

    values = {
        'SITE_TITLE': escape(site_title),
        'SOURCE_OPTIONS': _render_options(source_options),
        'CATEGORY_OPTIONS': _render_options(category_options),
        'ARTICLES': items,
    }
    # One pass, so filled-in values are never scanned for placeholders
    return PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], PAGE_TEMPLATE)


# ---------------------------------------------------------------------------
# Site builder
# ---------------------------------------------------------------------------

def build_site(content_dir: Path, output_dir: Path, site_title: str = DEFAULT_SITE_TITLE) -> int:
    """
    Build the static page and return the number of articles.

    Steps:
      1. Load sources and categories (missing files mean empty lists)
      2. Parse and render every article under content_dir/articles
      3. Write index.html and 404.html to output_dir
    """
    start_time = time.time()

    print(f"Content directory: {content_dir}")
    print(f"Output directory:  {output_dir}")
    print()

    print("=== Loading configuration ===")
    sources = load_sources(find_config(content_dir, 'sources'))
    categories = load_categories(find_config(content_dir, 'categories'))
    print(f"  Sources: {len(sources)}, categories: {len(categories)}")
    print()

    print("=== Rendering articles ===")
    articles = load_articles(content_dir / 'articles', sources)
    source_counts = {}
    for article in articles:
        source_counts[article.source_id] = source_counts.get(article.source_id, 0) + 1
    for source_id, count in source_counts.items():
        print(f"  {source_id}: {count} articles")
    print(f"  Total: {len(articles)}")
    print()

    print("=== Writing pages ===")
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / 'index.html'
    index_path.write_text(render_page(articles, sources, categories, site_title), encoding='utf-8')
    index_size_kb = index_path.stat().st_size / 1024
    print(f"  Written: index.html ({index_size_kb:.0f} KB)")
    (output_dir / '404.html').write_text(NOT_FOUND_HTML, encoding='utf-8')
    print("  Written: 404.html")

    elapsed = time.time() - start_time
    print()
    print("=" * 50)
    print(f"  Built {len(articles)} articles in {elapsed:.1f}s")
    print(f"  Output: {output_dir.resolve()}")
    print("=" * 50)

    return len(articles)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='Build the static news page from markdown article files.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python build_site.py
    python build_site.py --output ./site
    python build_site.py --content-dir ~/news --title "Morning Fusion"
        """,
    )
    parser.add_argument(
        '--content-dir',
        type=Path,
        default=DEFAULT_CONTENT_DIR,
        help='Content root holding articles/, sources and categories (default: web/content)',
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=Path('web/dist'),
        help='Output directory for the static site (default: web/dist)',
    )
    parser.add_argument(
        '--title',
        default=DEFAULT_SITE_TITLE,
        help=f'Page title (default: {DEFAULT_SITE_TITLE})',
    )

    args = parser.parse_args(argv)
    build_site(args.content_dir, args.output, args.title)
    return 0


if __name__ == '__main__':
    sys.exit(main())
