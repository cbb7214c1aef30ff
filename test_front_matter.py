"""Tests for frontmatter splitting and serialization."""

from front_matter import dump_frontmatter, parse_frontmatter


def test_no_delimiter_returns_text_unchanged():
    text = "# Title\n\nJust a body.\n"
    assert parse_frontmatter(text) == ({}, text)


def test_unclosed_block_is_all_body():
    text = "---\ntitle: Lost\nno closing line\n"
    assert parse_frontmatter(text) == ({}, text)


def test_fields_and_body():
    text = (
        '---\n'
        'title: "Pixel 10 leaks"\n'
        'category: technology\n'
        'sourceUrl: "https://9to5google.com/x"\n'
        '---\n'
        'Body line\n'
    )
    meta, body = parse_frontmatter(text)
    assert meta == {
        'title': 'Pixel 10 leaks',
        'category': 'technology',
        'sourceUrl': 'https://9to5google.com/x',
    }
    assert body == 'Body line\n'


def test_last_occurrence_wins_and_bad_lines_are_skipped():
    text = '---\ntitle: first\nnot a field\n: no key\ntitle: second\n---\n'
    meta, body = parse_frontmatter(text)
    assert meta == {'title': 'second'}
    assert body == ''


def test_empty_value():
    meta, _ = parse_frontmatter('---\nthumbnail: ""\nsummary:\n---\n')
    assert meta == {'thumbnail': '', 'summary': ''}


def test_escaped_quotes_inside_quoted_value():
    meta, _ = parse_frontmatter('---\ntitle: "Say \\"hi\\""\n---\n')
    assert meta['title'] == 'Say "hi"'


def test_crlf_line_endings():
    meta, body = parse_frontmatter('---\r\ntitle: "A"\r\n---\r\nBody\r\n')
    assert meta == {'title': 'A'}
    assert body == 'Body\r\n'


def test_dump_then_parse_gives_back_fields_and_body():
    meta = {
        'title': 'He said "no"',
        'category': 'technology',
        'thumbnail': '',
        'summary': 'Colons: fine',
    }
    body = '\nSome *markdown* here.\n'
    assert parse_frontmatter(dump_frontmatter(meta, body)) == (meta, body)


def test_dump_format():
    assert dump_frontmatter({'title': 'A'}, 'x') == '---\ntitle: "A"\n---\nx'
