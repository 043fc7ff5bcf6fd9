"""Tests for heuristic content taxonomy."""

from scoring import ContentInput
from taxonomy import SearchIntent, detect_content_type, detect_taxonomy


def test_defaults_for_neutral_content() -> None:
    taxonomy = detect_taxonomy(ContentInput(content="Bài viết về thời tiết hôm nay"))

    assert taxonomy.intent == SearchIntent.INFORMATIONAL
    assert taxonomy.content_type == "News/Trend"
    assert taxonomy.funnel_stage == "TOFU"
    assert taxonomy.seo_goal == "Traffic"
    assert taxonomy.industry == "Unclassified"
    assert taxonomy.sub_industry == "General"


def test_transactional_keywords_override_declared_intent() -> None:
    taxonomy = detect_taxonomy(ContentInput(content="Mua ngay giá tốt. Mua online, giá rẻ."))

    assert taxonomy.intent == SearchIntent.TRANSACTIONAL
    assert taxonomy.funnel_stage == "BOFU"
    assert taxonomy.seo_goal == "Conversion"
    assert taxonomy.content_type == "Sales landing page"


def test_commercial_keywords_give_mofu_comparison() -> None:
    taxonomy = detect_taxonomy(ContentInput(content="So sánh và đánh giá: lựa chọn nào tốt nhất?"))

    assert taxonomy.intent == SearchIntent.COMMERCIAL
    assert taxonomy.content_type == "Comparison"
    assert taxonomy.funnel_stage == "MOFU"
    assert taxonomy.seo_goal == "Conversion"


def test_review_content_without_commercial_intent_is_brand_trust() -> None:
    taxonomy = detect_taxonomy(ContentInput(content="Đánh giá chi tiết sản phẩm"))

    assert taxonomy.intent == SearchIntent.INFORMATIONAL
    assert taxonomy.content_type == "Product review"
    assert taxonomy.funnel_stage == "TOFU"
    assert taxonomy.seo_goal == "Brand-Trust"


def test_declared_intent_is_kept_when_no_heuristic_fires() -> None:
    taxonomy = detect_taxonomy(ContentInput(content="Cửa hàng ở quận 1", intent=SearchIntent.LOCAL))

    assert taxonomy.intent == SearchIntent.LOCAL


def test_content_type_order_first_match_wins() -> None:
    # "top 5" and "so sánh" both present: the top-list row comes first.
    assert detect_content_type("top 5 máy lọc và so sánh", 100) == "Top list"
    assert detect_content_type("hướng dẫn chọn máy lọc", 100) == "Buying guide"
    assert detect_content_type("hướng dẫn vệ sinh máy lọc", 100) == "How-to guide"
    assert detect_content_type("hepa là gì", 100) == "Glossary"


def test_electronics_industry_and_sub_industry() -> None:
    laptop = detect_taxonomy(ContentInput(content="Laptop gaming, laptop văn phòng và tai nghe"))
    phone = detect_taxonomy(ContentInput(content="điện thoại iphone, điện thoại samsung, phụ kiện"))

    assert (laptop.industry, laptop.sub_industry) == ("Consumer electronics", "Laptop")
    assert (phone.industry, phone.sub_industry) == ("Consumer electronics", "Phone")
