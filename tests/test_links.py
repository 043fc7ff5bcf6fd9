"""Tests for anchor extraction and classification."""

from links import analyze_links, is_generic_anchor


def test_single_generic_internal_link() -> None:
    links = analyze_links('<a href="/x">tại đây</a>')

    assert len(links) == 1
    assert links[0].href == "/x"
    assert links[0].anchor_text == "tại đây"
    assert links[0].type == "internal"
    assert links[0].is_generic is True


def test_internal_prefixes_and_external_links() -> None:
    content = (
        '<a href="#faq">FAQ</a> <a href="./guide">guide</a> '
        '<a href="https://example.org/report">báo cáo thị trường</a>'
    )
    types = [link.type for link in analyze_links(content)]
    assert types == ["internal", "internal", "external"]


def test_attribute_order_quotes_and_nested_tags() -> None:
    content = "<A class=\"btn\" HREF='https://shop.vn/may-loc' target=\"_blank\">Trang <b>chính</b>\n hãng</A>"
    links = analyze_links(content)

    assert len(links) == 1
    assert links[0].href == "https://shop.vn/may-loc"
    assert links[0].anchor_text == "Trang chính hãng"
    assert links[0].type == "external"


def test_self_closing_and_hrefless_anchors_are_skipped() -> None:
    content = '<a href="/x"/> text <a name="top">top</a> <a href="/y">máy lọc</a>'
    links = analyze_links(content)

    assert [link.href for link in links] == ["/y"]


def test_location_buckets_follow_document_offsets() -> None:
    filler = "w " * 500
    content = f'<a href="/a">x</a>{filler}<a href="/b">y</a>{filler}<a href="/c">z</a>'
    locations = [link.location for link in analyze_links(content)]

    assert locations == ["intro", "body", "conclusion"]


def test_generic_anchor_matching_ignores_case_and_accents() -> None:
    assert is_generic_anchor("Xem Them") is True
    assert is_generic_anchor("CLICK HERE now") is True
    assert is_generic_anchor("xem thông số chi tiết") is True
    assert is_generic_anchor("máy lọc không khí Sharp") is False
    assert is_generic_anchor("") is False


def test_no_anchors() -> None:
    assert analyze_links("") == []
    assert analyze_links("<p>no links here</p>") == []


def test_data_href_attribute_is_not_the_link_target() -> None:
    links = analyze_links('<a data-href="/tracking" href="/may-loc">máy lọc</a>')

    assert [link.href for link in links] == ["/may-loc"]
