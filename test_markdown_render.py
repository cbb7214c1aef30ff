"""Tests for the markdown-to-HTML converter."""

from markdown_render import extract_plain_text, markdown_to_html, render_inline


def test_heading_levels():
    assert markdown_to_html('# Title') == '<h1>Title</h1>'
    assert markdown_to_html('## Sub') == '<h2>Sub</h2>'
    assert markdown_to_html('### Small') == '<h3>Small</h3>'


def test_four_hashes_is_a_paragraph():
    assert markdown_to_html('#### Deep') == '<p>#### Deep</p>'


def test_list_items_share_one_container():
    html = markdown_to_html('- a\n- b')
    assert html == '<ul><li>a</li><li>b</li></ul>'
    assert html.count('<ul>') == 1


def test_blank_line_closes_list():
    assert markdown_to_html('* a\n\n* b') == '<ul><li>a</li></ul><ul><li>b</li></ul>'


def test_heading_closes_list():
    assert markdown_to_html('- a\n# H') == '<ul><li>a</li></ul><h1>H</h1>'


def test_bold_in_paragraph():
    assert markdown_to_html('Hello **world**') == '<p>Hello <strong>world</strong></p>'


def test_paragraph_joins_lines_until_block():
    md = 'first line\n  second line\n- item'
    assert markdown_to_html(md) == '<p>first line second line</p><ul><li>item</li></ul>'


def test_paragraph_after_list_closes_it():
    assert markdown_to_html('- a\ntext') == '<ul><li>a</li></ul><p>text</p>'


def test_standalone_image():
    html = markdown_to_html('![Cat](https://x.com/cat.png)')
    assert html == '<p><img src="https://x.com/cat.png" alt="Cat" style="max-width:100%"/></p>'


def test_link_and_italic():
    html = render_inline('See [site](https://a.com?x=1&y=2) *now*')
    assert html == (
        'See <a href="https://a.com?x=1&amp;y=2" target="_blank" rel="noopener noreferrer">site</a>'
        ' <em>now</em>'
    )


def test_raw_html_is_escaped():
    assert markdown_to_html('<script>alert("x")</script>') == (
        '<p>&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;</p>'
    )


def test_quote_in_url_cannot_break_attribute():
    html = render_inline('[x](https://a.com/"onmouseover=1)')
    assert '"onmouseover' not in html
    assert '&quot;onmouseover' in html


def test_unsupported_blocks_render_as_text():
    assert markdown_to_html('1. one\n> quote') == '<p>1. one &gt; quote</p>'


def test_carriage_returns_ignored():
    assert markdown_to_html('# A\r\n\r\ntext\r\n') == '<h1>A</h1><p>text</p>'


def test_empty_input():
    assert markdown_to_html('') == ''


def test_extract_plain_text():
    md = '## Heading\n\n- **bold** item\nSee [link](https://a.com)\n'
    assert extract_plain_text(md) == 'Heading bold item See link'


def test_inline_image():
    assert render_inline('See ![a](b.png) here') == (
        'See <img src="b.png" alt="a" style="max-width:100%"/> here'
    )


def test_standalone_image_closes_list():
    assert markdown_to_html('- a\n![x](y)') == (
        '<ul><li>a</li></ul><p><img src="y" alt="x" style="max-width:100%"/></p>'
    )


def test_asterisks_in_attributes_are_left_alone():
    assert render_inline('see ![a*b](c*d) now') == (
        'see <img src="c*d" alt="a*b" style="max-width:100%"/> now'
    )
    assert render_inline('[x](https://a.com/**y**) and *z*') == (
        '<a href="https://a.com/**y**" target="_blank" rel="noopener noreferrer">x</a>'
        ' and <em>z</em>'
    )


def test_bold_can_wrap_a_link():
    assert render_inline('**[x](u)**') == (
        '<strong><a href="u" target="_blank" rel="noopener noreferrer">x</a></strong>'
    )
