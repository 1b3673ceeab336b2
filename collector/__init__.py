# -*- coding: utf-8 -*-
"""
Prometheus Collector 模块

功能：
- 定义 bucket / quota 指标注册表
- 执行采集周期，把 OVH API 数据写入指标
- 暴露 Prometheus 格式的指标
"""

from .collector import ProjectCollector
from .fetch_result import FetchResult, FetchStatus
from .metrics import MetricRegistry
