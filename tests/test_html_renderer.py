from __future__ import annotations

import pytest

from more_from_widget.renderers import HtmlRenderer, MoreFromView, PostEntry, RenderOptions, esc_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com/a?b=1&c=2", "https://example.com/a?b=1&c=2"),
        ("  http://example.com/with space ", "http://example.com/with%20space"),
        ("/relative/path", "/relative/path"),
        ("#anchor", "#anchor"),
        ("example.com/page", "http://example.com/page"),
        ("index.php?p=1", "index.php?p=1"),
        ("mailto:someone@example.com", "mailto:someone@example.com"),
        ("javascript:alert(1)", ""),
        ("JaVaScRiPt:alert(1)", ""),
        ("data:text/html;base64,xx", ""),
        ('http://example.com/"><script>', "http://example.com/script"),
        ("http://example.com/%0d%0aSet-Cookie", "http://example.com/Set-Cookie"),
        ("", ""),
        (None, ""),
    ],
)
def test_esc_url(url, expected):
    assert esc_url(url) == expected


def test_renders_exact_markup():
    view = MoreFromView(
        list_class="is-list columns-3",
        title="More From",
        entries=(
            PostEntry(
                permalink="http://example.test/a/",
                title="Alpha",
                thumbnail_url="http://cdn.test/a.jpg",
                date_iso="2024-03-02T09:00:00+00:00",
                date_display="March 02, 2024",
            ),
            PostEntry(permalink="http://example.test/b/", title="Beta"),
        ),
    )

    html = HtmlRenderer().render(view)

    assert html == (
        '<div class="wp-block-gb-more-from-widget">'
        '<h3 class="more-from-title">More From</h3>'
        '<ul class="is-list columns-3">'
        "<li>\n"
        '<img src="http://cdn.test/a.jpg" />'
        '<a href="http://example.test/a/">Alpha</a>'
        '<time datetime="2024-03-02T09:00:00+00:00" class="post-date">March 02, 2024</time>'
        "</li>\n"
        "<li>\n"
        '<a href="http://example.test/b/">Beta</a>'
        "</li>\n"
        "</ul></div>"
    )


def test_renders_empty_list_without_title():
    html = HtmlRenderer().render(MoreFromView(list_class="is-grid columns-2"))

    assert html == '<div class="wp-block-gb-more-from-widget"><ul class="is-grid columns-2"></ul></div>'


def test_escapes_text_and_attribute_contexts():
    view = MoreFromView(
        list_class='is-list columns-3" onclick="x',
        entries=(
            PostEntry(
                permalink="http://example.test/?a=1&b=2",
                title="<b>Bold</b> & more",
                date_iso='2024"',
                date_display="<em>today</em>",
            ),
        ),
    )

    html = HtmlRenderer().render(view)

    assert 'class="is-list columns-3&#34; onclick=&#34;x"' in html
    assert 'href="http://example.test/?a=1&amp;b=2"' in html
    assert "&lt;b&gt;Bold&lt;/b&gt; &amp; more" in html
    assert 'datetime="2024&#34;"' in html
    assert "&lt;em&gt;today&lt;/em&gt;" in html


def test_unsafe_thumbnail_is_dropped():
    view = MoreFromView(
        list_class="is-list columns-3",
        entries=(PostEntry(permalink="/p/", title="P", thumbnail_url="javascript:alert(1)"),),
    )

    assert "<img" not in HtmlRenderer().render(view)


def test_title_is_raw_by_default_and_escaped_on_request():
    view = MoreFromView(list_class="is-list columns-3", title="<em>Latest</em>")
    renderer = HtmlRenderer()

    assert '<h3 class="more-from-title"><em>Latest</em></h3>' in renderer.render(view)
    escaped = renderer.render(view, options=RenderOptions(escape_title=True))
    assert '<h3 class="more-from-title">&lt;em&gt;Latest&lt;/em&gt;</h3>' in escaped
