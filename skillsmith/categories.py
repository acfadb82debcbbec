"""Keyword-bucket category classifier.

Buckets are tested in `CATEGORY_ORDER` and the first match wins, so text that
mentions both data and design keywords lands in whichever bucket comes first.
"""

import re
from typing import Pattern, Tuple

CATEGORIES = (
    "dev-tools",
    "automation",
    "content",
    "productivity",
    "data",
    "design",
    "communication",
    "other",
)

DEFAULT_CATEGORY = "other"

CATEGORY_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    (
        "dev-tools",
        re.compile(
            r"git|code|dev|开发|代码|调试|debug|test|api|sdk|部署|deploy|npm|docker|\bci\b|\bcd\b"
        ),
    ),
    ("automation", re.compile(r"自动|automat|workflow|流程|batch|批量|cron|schedule|定时|脚本")),
    ("content", re.compile(r"写|write|文章|blog|content|内容|seo|copywriting|文案|排版")),
    ("productivity", re.compile(r"效率|todo|task|项目|project|manage|计划|plan|时间管理")),
    ("data", re.compile(r"数据|data|分析|csv|json|sql|excel|统计|报表|可视化")),
    ("design", re.compile(r"设计|design|\bui\b|css|样式|figma|sketch|图片|图像")),
    ("communication", re.compile(r"消息|message|slack|discord|邮件|email|通知|notify|聊天")),
)

CATEGORY_ORDER = tuple(category for category, _ in CATEGORY_RULES)


def detect_category(content: str) -> str:
    """Classify `content` into one of `CATEGORIES`."""
    text = (content or "").lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return category
    return DEFAULT_CATEGORY


def is_category(value: str) -> bool:
    return value in CATEGORIES
