# -*- coding: utf-8 -*-
"""
定时任务实现模块

功能：
- 定时调用采集函数刷新数据
- 不直接操作 Prometheus metrics
- 只负责"什么时候刷新"
"""

import threading
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CollectionScheduler:
    """
    采集定时任务调度器

    职责：
    1. 启动后立即执行一次采集，之后每 interval 秒执行一次
    2. 采集异常只记录日志，不退出循环
    3. stop() 之后不再开始新的周期，正在执行的周期自然结束
       （非 daemon 线程，进程退出前会等待当前周期完成）
    """

    def __init__(self, collect_func: Callable, interval: float = 600):
        """
        初始化定时任务调度器

        Args:
            collect_func: 采集函数
            interval: 刷新间隔（秒），默认 600（10 分钟）

        Raises:
            ValueError: interval 不是正数
        """
        if interval <= 0:
            raise ValueError(f"interval 必须是正数，当前值: {interval}")

        self.collect_func = collect_func
        self.interval = interval

        # 控制标志
        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._cycles = 0

        logger.info(f"CollectionScheduler 初始化完成: interval={interval}s")

    def start(self):
        """
        启动定时任务（后台线程）
        """
        with self._lock:
            if self._running:
                logger.warning("定时任务已在运行")
                return

            self._running = True
            self._stop_event.clear()

            self._thread = threading.Thread(
                target=self._refresh_loop,
                name="CollectionRefreshThread",
                daemon=False
            )
            self._thread.start()

        logger.info("定时任务调度器已启动")

    def stop(self, timeout: float = 5):
        """
        停止定时任务

        可重复调用，第二次调用直接返回

        Args:
            timeout: 等待采集线程退出的最长时间（秒）
        """
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stop_event.set()
            thread = self._thread

        logger.info("停止定时任务调度器...")

        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)

        logger.info("定时任务调度器已停止")

    def _refresh_loop(self):
        """
        刷新循环

        先立即执行一次，然后每 interval 秒执行一次 collect_func
        """
        logger.info(f"[Scheduler] 刷新循环启动，间隔: {self.interval} 秒")

        while not self._stop_event.is_set():
            try:
                logger.debug("[Scheduler] refresh triggered")
                self.collect_func()
                logger.debug("[Scheduler] refresh completed")
            except Exception as e:
                # 捕获异常，打印日志，不退出线程
                logger.error(f"[Scheduler] 刷新异常: {e}", exc_info=True)
            finally:
                self._cycles += 1

            # 等待指定间隔，stop() 时立即唤醒
            if self._stop_event.wait(self.interval):
                break

        logger.info("[Scheduler] 刷新循环已退出")

    def get_status(self) -> dict:
        """
        获取定时任务状态

        Returns:
            状态信息字典
        """
        return {
            'running': self._running,
            'interval': self.interval,
            'cycles': self._cycles,
            'thread_alive': self._thread.is_alive() if self._thread else False
        }
