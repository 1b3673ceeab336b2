# -*- coding: utf-8 -*-
"""
Exporter 生命周期控制

功能：
- start(): 启动定时采集和 HTTP 监听（后台线程）
- stop(): 停止定时采集、关闭 HTTP 监听，可重复调用
- wait(): 主线程阻塞直到 stop() 完成
"""

import threading
import logging
from typing import Optional
from flask import Flask
from werkzeug.serving import make_server, BaseWSGIServer

from scheduler.scheduler import CollectionScheduler

logger = logging.getLogger(__name__)


class ExporterLifecycle:
    """
    生命周期控制器

    - 定时任务和 HTTP 服务器各自运行在后台线程
    - stop() 不会中断正在进行的采集或抓取
    """

    def __init__(self, scheduler: CollectionScheduler, app: Flask, host: str = '0.0.0.0', port: int = 3000):
        """
        Args:
            scheduler: 采集定时任务
            app: Flask 抓取应用
            host: 监听地址
            port: 监听端口（0 表示由系统分配）
        """
        self.scheduler = scheduler
        self.app = app
        self.host = host
        self.port = port

        self._server: Optional[BaseWSGIServer] = None
        self._server_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._started = False
        self._stopping = False

    def start(self):
        """
        启动定时任务和 HTTP 服务器

        Raises:
            OSError: 端口绑定失败
        """
        with self._lock:
            if self._started:
                logger.warning("Exporter 已启动")
                return
            self._started = True

        # 多线程模式：抓取请求之间、抓取与采集之间互不阻塞
        self._server = make_server(self.host, self.port, self.app, threaded=True)
        self.port = self._server.server_port

        self.scheduler.start()

        self._server_thread = threading.Thread(
            target=self._server.serve_forever,
            name="ScrapeServerThread",
            daemon=False
        )
        self._server_thread.start()
        logger.info(f"server listening on {self.host}:{self.port}")

    def stop(self):
        """
        停止定时任务并关闭 HTTP 服务器

        可重复调用，第二次调用直接返回
        """
        with self._lock:
            if self._stopping:
                return
            self._stopping = True

        logger.info("closing")

        self.scheduler.stop()

        if self._server is not None:
            # shutdown() 等待 serve_forever 退出，服务线程未启动时会一直阻塞
            if self._server_thread is not None and self._server_thread.is_alive():
                self._server.shutdown()
            self._server.server_close()

        self._stopped.set()
        logger.info("Exporter 已停止")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        阻塞直到 stop() 完成

        Returns:
            是否已停止
        """
        return self._stopped.wait(timeout)

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()
