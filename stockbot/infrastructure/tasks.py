"""
异步任务工具

- race_with_background: 任务与计时器竞速，超时不取消任务
- InFlightRegistry: 按键去重的进行中任务表
"""

import asyncio
from typing import Awaitable, Callable, Dict, Generic, Optional, Tuple, TypeVar

from stockbot.infrastructure.logging import get_logger


T = TypeVar('T')

logger = get_logger(__name__)


async def race_with_background(
    task: "asyncio.Future[T]",
    timeout: float,
) -> Tuple[bool, Optional[T]]:
    """
    等待任务完成或超时，先到者决定结果

    超时时任务继续在后台运行，其结果只能通过副作用
    （如写缓存）传递。

    Returns:
        (是否按时完成, 任务结果)
    """
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task in done:
        return True, task.result()
    return False, None


class InFlightRegistry(Generic[T]):
    """
    进行中任务表

    同一键在任务完成前只会有一个任务，
    并发请求加入同一任务而不是重复发起外部调用。
    """

    def __init__(self, name: str = "inflight"):
        self.name = name
        self._tasks: Dict[str, "asyncio.Task[T]"] = {}

    def get_or_start(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
    ) -> Tuple["asyncio.Task[T]", bool]:
        """
        获取进行中的任务，没有则创建

        Returns:
            (任务, 是否新建)
        """
        task = self._tasks.get(key)
        if task is not None and not task.done():
            logger.debug(f"[{self.name}] 加入进行中的任务: {key}")
            return task, False

        task = asyncio.ensure_future(factory())
        self._tasks[key] = task
        task.add_done_callback(lambda t, k=key: self._on_done(k, t))
        return task, True

    def _on_done(self, key: str, task: "asyncio.Task[T]") -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if task.cancelled():
            logger.warning(f"[{self.name}] 任务被取消: {key}")
        elif task.exception() is not None:
            logger.error(f"[{self.name}] 任务异常: {key}: {task.exception()}")

    def __contains__(self, key: str) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: Optional[float] = None) -> int:
        """
        等待所有进行中的任务结束

        Returns:
            int: 超时后仍未完成的任务数
        """
        tasks = list(self._tasks.values())
        if not tasks:
            return 0
        _, pending = await asyncio.wait(tasks, timeout=timeout)
        return len(pending)
