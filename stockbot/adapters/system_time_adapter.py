"""
系统时间适配器 - 实现 TimePort

缓存的过期判断和分析结果时间戳都取自这里，测试中可替换为假时钟。
"""

import time

from stockbot.ports.interfaces import TimePort


class SystemTimeAdapter(TimePort):

    def now(self) -> float:
        """当前时间戳（秒）"""
        return time.time()
