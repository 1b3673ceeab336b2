# -*- coding: utf-8 -*-
"""
HTTP 服务模块

功能：
- Flask 抓取端点（任意路径、任意方法都返回当前指标）
- 生命周期控制（启动 / 停止定时任务和 HTTP 监听）
"""

from .app import create_app
from .lifecycle import ExporterLifecycle

__all__ = ['create_app', 'ExporterLifecycle']
