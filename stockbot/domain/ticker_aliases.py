# -*- coding: utf-8 -*-
"""
常用股票名称映射

键统一为小写，仅做精确匹配（含常见简称和错别字），不做模糊匹配。
"""

from typing import Dict, Optional

from stockbot.domain.models import Ticker


# Common names (Korean / English, incl. frequent variants) to upstream symbols
COMMON_STOCKS: Dict[str, str] = {
    # KOSPI
    '삼성전자': '005930.KS', '삼성': '005930.KS', '삼전': '005930.KS', '삼성 전자': '005930.KS',
    'samsung electronics': '005930.KS',
    'sk하이닉스': '000660.KS', '하이닉스': '000660.KS', 'sk 하이닉스': '000660.KS',
    'sk hynix': '000660.KS',
    'lg에너지솔루션': '373220.KS', '엘지에너지솔루션': '373220.KS', 'lg엔솔': '373220.KS',
    '삼성바이오로직스': '207940.KS', '삼바': '207940.KS',
    '삼성sdi': '006400.KS', '삼성 sdi': '006400.KS',
    '현대차': '005380.KS', '현대자동차': '005380.KS',
    '기아': '000270.KS', '기아차': '000270.KS',
    '네이버': '035420.KS', 'naver': '035420.KS',
    '카카오': '035720.KS', 'kakao': '035720.KS',
    'posco홀딩스': '005490.KS', '포스코홀딩스': '005490.KS', '포스코': '005490.KS',
    'lg화학': '051910.KS', '엘지화학': '051910.KS',
    '셀트리온': '068270.KS',
    'kb금융': '105560.KS',
    '신한지주': '055550.KS',
    # KOSDAQ
    '에코프로': '086520.KQ',
    '에코프로비엠': '247540.KQ',
    '알테오젠': '196170.KQ',
    # US
    '애플': 'AAPL', 'apple': 'AAPL',
    '테슬라': 'TSLA', 'tesla': 'TSLA',
    '엔비디아': 'NVDA', 'nvidia': 'NVDA',
    '마이크로소프트': 'MSFT', 'microsoft': 'MSFT',
    '아마존': 'AMZN', 'amazon': 'AMZN',
    '구글': 'GOOGL', 'google': 'GOOGL', '알파벳': 'GOOGL',
    '메타': 'META', 'meta': 'META',
    '넷플릭스': 'NFLX', 'netflix': 'NFLX',
}


def normalize_alias(name: str) -> str:
    return name.strip().lower()


def lookup_alias(name: str) -> Optional[Ticker]:
    """按名称查找映射的代码，未命中返回 None"""
    symbol = COMMON_STOCKS.get(normalize_alias(name))
    if symbol is None:
        return None
    return Ticker.parse(symbol)
