"""
StockBot - 聊天平台股票查询技能服务器

分层结构：
- domain: 领域模型
- ports: 端口接口
- adapters: 外部服务适配器
- use_cases: 代码解析 / 行情获取 / 新闻分析
- orchestrator: 请求编排
- presentation: 回复生成
- infrastructure: 日志、错误、缓存、异步任务
- api: FastAPI 服务
"""

__version__ = "1.0.0"
