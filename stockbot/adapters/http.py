"""
共享 HTTP 会话

所有直接 HTTP 请求（chart 兜底、新闻源）复用同一连接池。
调用方都处于 5 秒回复期限内，只做一次快速重试。
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from typing import Optional


# 上游会拦截默认的 python-requests UA
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

_SESSION: Optional[requests.Session] = None


def get_http_session() -> requests.Session:
    """获取（必要时创建）共享会话"""
    global _SESSION
    if _SESSION is None:
        retry = Retry(
            total=1,
            backoff_factor=0.1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=20)
        session = requests.Session()
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        _SESSION = session
    return _SESSION


def http_get(url: str, **kwargs) -> requests.Response:
    return get_http_session().get(url, **kwargs)


def close_http_session() -> None:
    """关闭共享会话（应用关闭时调用）"""
    global _SESSION
    if _SESSION is not None:
        _SESSION.close()
        _SESSION = None
