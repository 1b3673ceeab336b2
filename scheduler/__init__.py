# -*- coding: utf-8 -*-
"""
定时任务模块

功能：
- 启动时立即采集一次，之后按固定间隔刷新
- 在后台线程中运行，不阻塞主程序和 HTTP 抓取
"""

from scheduler.scheduler import CollectionScheduler

__all__ = ['CollectionScheduler']
