"""
新闻源文本解析

新闻源按半结构化文本处理，只做简单的标签扫描，不做 XML 校验。
"""

import html
import re
from typing import Optional

from stockbot.domain.models import NewsDigest, NewsItem


ITEM_PATTERN = re.compile(r"<item\b[^>]*>(.*?)</item>", re.DOTALL)
TITLE_PATTERN = re.compile(r"<title>(?:<!\[CDATA\[(.*?)\]\]>|([^<]*))</title>", re.DOTALL)
LINK_PATTERN = re.compile(r"<link>([^<]+)</link>")
STOCK_CODE_PATTERN = re.compile(r"\(([0-9]{6})\)")


def extract_headlines(feed_text: str, limit: int = 4) -> NewsDigest:
    """
    按新闻源顺序提取 (标题, 链接)

    频道级别的标题和链接（第一个 <item> 之前的内容）不计入。
    """
    items: NewsDigest = []
    for block in ITEM_PATTERN.findall(feed_text or ""):
        title_match = TITLE_PATTERN.search(block)
        if not title_match:
            continue
        raw_title = title_match.group(1) or title_match.group(2) or ""
        title = html.unescape(raw_title).strip()
        if not title:
            continue
        link_match = LINK_PATTERN.search(block)
        link = html.unescape(link_match.group(1)).strip() if link_match else None
        items.append(NewsItem(title=title, link=link))
        if len(items) >= limit:
            break
    return items


def extract_stock_code(feed_text: str) -> Optional[str]:
    """扫描形如 (005930) 的 6 位本土代码"""
    match = STOCK_CODE_PATTERN.search(feed_text or "")
    return match.group(1) if match else None
