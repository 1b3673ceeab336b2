# -*- coding: utf-8 -*-
"""
Prometheus 指标注册表模块

功能：
- 在独立的 CollectorRegistry 中定义 bucket / quota 指标
- 注册进程级默认指标（process / platform / gc）
- 提供 set（按标签写入）和 render（输出 text format）操作
"""

import logging
from typing import Dict, Optional
from prometheus_client import (
    CollectorRegistry, Gauge, Counter, Histogram,
    ProcessCollector, PlatformCollector, GCCollector,
    generate_latest, CONTENT_TYPE_LATEST
)

logger = logging.getLogger(__name__)

BUCKET_BYTES = 'bucket_bytes'
BUCKET_OBJECTS = 'bucket_objects'
QUOTA_USED = 'quota_used'
QUOTA_MAX = 'quota_max'


class MetricRegistry:
    """
    指标注册表

    功能：
    - 持有全部 Gauge，标签组合 -> 最近一次写入的值
    - set 为覆盖写，不累加，不清理过期标签组合
    - 线程安全依赖 prometheus_client 内部的每指标锁：
      render 时每个指标的子项会先在锁内复制，不会读到半写状态
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None, default_metrics: bool = True):
        """
        初始化指标注册表

        Args:
            registry: prometheus CollectorRegistry（默认新建，不使用全局 REGISTRY）
            default_metrics: 是否注册进程级默认指标
        """
        self.registry = registry or CollectorRegistry()

        if default_metrics:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        # 对外指标（名称和标签需与既有看板保持一致）
        self.bucket_bytes = Gauge(
            'swift_bucket_bytes_total',
            'Swift bucket size in bytes',
            ['bucket', 'region'],
            registry=self.registry
        )

        self.bucket_objects = Gauge(
            'swift_bucket_objects_total',
            'Swift bucket object count',
            ['bucket', 'region'],
            registry=self.registry
        )

        self.quota_max = Gauge(
            'project_quota_max',
            'Project quota maximum',
            ['region', 'resource'],
            registry=self.registry
        )

        self.quota_used = Gauge(
            'project_quota_used',
            'Project quota usage',
            ['region', 'resource'],
            registry=self.registry
        )

        # Exporter 自身指标
        self.collect_errors_total = Counter(
            'ovh_exporter_collect_errors_total',
            'Total number of failed OVH API fetches',
            ['resource'],
            registry=self.registry
        )

        self.collect_duration_seconds = Histogram(
            'ovh_exporter_collect_duration_seconds',
            'Duration of a collection cycle in seconds',
            buckets=[0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
            registry=self.registry
        )

        self.last_success_timestamp = Gauge(
            'ovh_exporter_last_success_timestamp_seconds',
            'Unix time of the last successful fetch per resource',
            ['resource'],
            registry=self.registry
        )

        self._gauges: Dict[str, Gauge] = {
            BUCKET_BYTES: self.bucket_bytes,
            BUCKET_OBJECTS: self.bucket_objects,
            QUOTA_USED: self.quota_used,
            QUOTA_MAX: self.quota_max,
        }

    def set(self, gauge_name: str, labels: Dict[str, str], value: float):
        """
        写入（覆盖）一个 Gauge 值

        Args:
            gauge_name: bucket_bytes / bucket_objects / quota_used / quota_max
            labels: 标签字典，如 {'bucket': 'archive', 'region': 'GRA'}
            value: 数值

        Raises:
            KeyError: 未知的 gauge_name
        """
        gauge = self._gauges[gauge_name]
        gauge.labels(**labels).set(value)

    def record_error(self, resource: str):
        """记录一次拉取失败"""
        self.collect_errors_total.labels(resource=resource).inc()

    def record_success(self, resource: str):
        """记录一次拉取成功（当前时间）"""
        self.last_success_timestamp.labels(resource=resource).set_to_current_time()

    def render(self) -> bytes:
        """
        获取 Prometheus 格式的指标数据

        Returns:
            Prometheus text format（bytes）
        """
        return generate_latest(self.registry)

    def get_sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """
        读取某个样本的当前值

        Args:
            name: 样本名称（如 swift_bucket_bytes_total）
            labels: 标签字典

        Returns:
            样本值，不存在时返回 None
        """
        return self.registry.get_sample_value(name, labels or {})
