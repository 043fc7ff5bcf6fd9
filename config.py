"""
Configuration for the content SEO scoring engine
"""

CATEGORY_WEIGHTS = {
    "intent": 0.30,
    "onpage": 0.25,
    "eeat": 0.20,
    "ctr": 0.15,
    "readability": 0.10,
}

IMPACT_WEIGHTS = {
    "High": 3,
    "Medium": 2,
    "Low": 1,
}

MAX_PRIORITY_FIXES = 5

SCORING = {
    "intent_sections": {
        "points": 40,
        # A required phrase found only inside one of these does not count.
        "compound_phrases": ["đánh giá", "giá trị"],
        "required": {
            "Informational": {
                "definition": ["là gì", "định nghĩa", "khái niệm"],
                "how-to guide": ["hướng dẫn", "cách", "bước"],
            },
            "Commercial": {
                "comparison/review": ["so sánh", "đánh giá", "review", "ưu nhược điểm", "ưu điểm"],
                "price/cost": ["giá", "chi phí", "bảng giá"],
            },
            "Transactional": {
                "price": ["giá", "bảng giá", "khuyến mãi"],
                "purchase call-to-action": ["mua ngay", "đặt hàng", "liên hệ", "hotline"],
                "warranty/shipping": ["bảo hành", "giao hàng", "đổi trả"],
            },
            "Local": {
                "address": ["địa chỉ", "chi nhánh", "cửa hàng"],
                "opening hours/contact": ["giờ mở cửa", "hotline", "liên hệ", "số điện thoại"],
                "directions/map": ["bản đồ", "chỉ đường", "google maps"],
            },
        },
    },
    "thin_content": {
        "min_words": {"Informational": 1000},
        "default_min_words": 700,
        "pass_points": 60,
        "fail_points": 20,
    },
    "keyword_in_title": {"points": 15},
    "keyword_in_intro": {"points": 10, "intro_words": 100},
    "keyword_density": {
        "points": 15,
        "min_words": 20,
        "target_min": 0.5,
        "target_max": 2.5,
        "out_of_range_score": 40,
    },
    "heading_structure": {"points": 10},
    "internal_links": {
        "points": 15,
        "partial_points": 5,
        "partial_score": 50,
        "long_content_words": 1000,
        "long_content_min_links": 2,
    },
    "anchor_text": {"points": 10},
    "external_link_position": {"points": 5, "partial_score": 50},
    "secondary_keywords": {"points": 20, "pass_ratio": 0.5},
    "eeat": {
        "author": {
            "points": 25,
            "phrases": ["tác giả", "người viết", "biên tập viên", "author"],
        },
        "experience": {
            "points": 25,
            "phrases": ["tôi đã", "kinh nghiệm", "test", "trải nghiệm", "thực tế sử dụng"],
        },
        "faq": {
            "points": 30,
            "phrases": ["faq", "câu hỏi thường gặp", "hỏi đáp"],
        },
        "citations": {
            "points": 20,
            "partial_points": 10,
            "phrases": ["nguồn:", "theo báo cáo", "theo nghiên cứu", "nghiên cứu của", "số liệu từ", "according to"],
        },
    },
    "title_length": {"points": 30, "min": 30, "max": 65},
    "power_words": {
        "points": 40,
        "words": ["top", "nhất", "hiệu quả", "bí quyết", "review", "bảng giá", "mới"],
    },
    "meta_description": {"points": 30, "min_exclusive": 120, "max_exclusive": 165},
    "images": {"partial_score": 50},
    "lists": {"points": 50},
    "paragraph_length": {"points": 50, "max_words": 150, "partial_points": 20},
}

# Anchor texts that carry no keyword value. Matched accent-insensitively.
GENERIC_ANCHORS = [
    "tại đây",
    "click here",
    "xem thêm",
    "chi tiết",
    "nhấn vào đây",
    "bấm vào đây",
    "click vào đây",
    "read more",
    "link này",
]

LINK_LOCATION = {
    "intro_ratio": 0.15,
    "conclusion_ratio": 0.85,
}

TAXONOMY = {
    "transactional_keywords": ["mua", "giá", "bán", "đặt hàng", "liên hệ", "shop", "cửa hàng", "tại hà nội", "tphcm"],
    "transactional_threshold": 3,
    "commercial_keywords": ["tốt nhất", "so sánh", "review", "đánh giá", "nên mua", "vs", "top", "lựa chọn"],
    "commercial_threshold": 2,
    "default_content_type": "News/Trend",
    "landing_page_max_words": 300,
    "electronics_keywords": ["laptop", "điện thoại", "camera", "phụ kiện", "máy tính", "pc", "tai nghe"],
    "electronics_threshold": 2,
    "electronics_industry": "Consumer electronics",
    "sub_industries": [
        ("Laptop", ["laptop"]),
        ("Phone", ["điện thoại", "iphone", "samsung"]),
        ("Camera", ["camera"]),
    ],
    "default_industry": "Unclassified",
    "default_sub_industry": "General",
}

FAQ_TEMPLATES = {
    "Informational": [
        "{keyword} là gì?",
        "Lợi ích của {keyword} như thế nào?",
        "Cách sử dụng {keyword} hiệu quả?",
        "{keyword} gồm những loại nào?",
    ],
    "Commercial": [
        "{keyword} loại nào tốt nhất?",
        "Có nên mua {keyword} không?",
        "Ưu nhược điểm của {keyword} là gì?",
        "So sánh các dòng {keyword} phổ biến hiện nay?",
    ],
    "Transactional": [
        "Mua {keyword} ở đâu uy tín?",
        "Giá {keyword} hiện nay bao nhiêu?",
        "{keyword} được bảo hành bao lâu?",
        "Có giao {keyword} tận nơi không?",
    ],
    "Local": [
        "Địa chỉ bán {keyword} gần đây ở đâu?",
        "Cửa hàng {keyword} mở cửa lúc mấy giờ?",
        "Đường đến cửa hàng {keyword} đi như thế nào?",
        "Có chỗ gửi xe khi đến mua {keyword} không?",
    ],
}

# Audit item id -> ContentInput field the editor should focus. Unlisted ids
# point at the content body.
FIELD_TARGETS = {
    "focus-keyword": "focus_keyword",
    "key-title": "seo_title",
    "key-slug": "slug",
    "keywords-secondary": "secondary_keywords",
    "ctr-title-length": "seo_title",
    "ctr-power-word": "seo_title",
    "ctr-meta": "meta_description",
}

MODEL = "claude-sonnet-4-5-20250929"

ITERATIONS = {
    "default_count": 3,
    "max_count": 10,
    "plateau_patience": 2,
}

OUTPUT = {
    "dir": "output",
    "save_all_versions": True,
}
