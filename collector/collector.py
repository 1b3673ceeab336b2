# -*- coding: utf-8 -*-
"""
项目指标采集模块

功能：
- 并发拉取 Swift 容器和项目配额
- 将拉取结果映射为 Gauge 写入
- 单个资源拉取失败只影响该资源，旧值保持不变
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List

from collector.fetch_result import FetchResult
from collector.metrics import MetricRegistry, BUCKET_BYTES, BUCKET_OBJECTS, QUOTA_USED, QUOTA_MAX

logger = logging.getLogger(__name__)

# (resource 标签, used 字段, max 字段)
QUOTA_RESOURCES = (
    ('cores', 'used_cores', 'max_cores'),
    ('instances', 'used_instances', 'max_instances'),
    ('memory', 'used_ram', 'max_ram'),
)


class ProjectCollector:
    """
    项目指标采集器

    功能：
    - collect() 执行一次完整的采集周期
    - 两个资源互不影响：任一拉取失败或映射异常只记录日志和错误计数
    - 写入没有事务性，采集过程中的部分结果对并发抓取立即可见
    """

    def __init__(self, provider, metric_registry: MetricRegistry, project_id: str):
        """
        初始化采集器

        Args:
            provider: 项目资源 Provider（ProjectProvider 实现）
            metric_registry: 指标注册表
            project_id: 项目 ID
        """
        self.provider = provider
        self.metrics = metric_registry
        self.project_id = project_id

    def collect(self) -> Dict[str, Any]:
        """
        执行一次采集周期

        Returns:
            汇总信息字典：
            - containers: 写入的容器数量
            - quotas: 写入的区域配额数量
            - skipped_quotas: 因没有实例配额而跳过的区域数量
            - failed: 失败的资源列表
        """
        logger.info("collecting metrics")
        start_time = time.time()

        summary: Dict[str, Any] = {
            'containers': 0,
            'quotas': 0,
            'skipped_quotas': 0,
            'failed': [],
        }

        tasks = {
            'quotas': (self.provider.fetch_quotas, self._apply_quotas),
            'containers': (self.provider.fetch_containers, self._apply_containers),
        }

        with ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix='OVHFetch') as executor:
            futures = {
                resource: executor.submit(self._collect_resource, resource, fetch, apply, summary)
                for resource, (fetch, apply) in tasks.items()
            }

            for resource, future in futures.items():
                try:
                    if not future.result():
                        summary['failed'].append(resource)
                except Exception as e:
                    logger.error(f"[采集] {resource} 采集异常: {e}", exc_info=True)
                    self.metrics.record_error(resource)
                    summary['failed'].append(resource)

        duration = time.time() - start_time
        self.metrics.collect_duration_seconds.observe(duration)

        logger.info(
            f"[采集] 采集完成: containers={summary['containers']}, quotas={summary['quotas']}, "
            f"skipped={summary['skipped_quotas']}, failed={summary['failed']}, 耗时={duration:.2f}s"
        )
        return summary

    def _collect_resource(
        self,
        resource: str,
        fetch: Callable[[str], FetchResult],
        apply: Callable[[List[Any], Dict[str, Any]], None],
        summary: Dict[str, Any]
    ) -> bool:
        """
        拉取并写入单个资源

        Returns:
            是否成功
        """
        result = fetch(self.project_id)

        if result.is_failed():
            logger.error(f"error listing {resource}: {result.error}")
            self.metrics.record_error(resource)
            return False

        logger.info(f"listed {resource}: {len(result.items)}")
        apply(result.items, summary)
        self.metrics.record_success(resource)
        return True

    def _apply_containers(self, containers: List[Any], summary: Dict[str, Any]):
        """将容器列表写入 bucket 指标"""
        for container in containers:
            labels = {'bucket': container.name, 'region': container.region}
            self.metrics.set(BUCKET_BYTES, labels, container.stored_bytes)
            self.metrics.set(BUCKET_OBJECTS, labels, container.stored_objects)
            summary['containers'] += 1

    def _apply_quotas(self, quotas: List[Any], summary: Dict[str, Any]):
        """将区域配额写入 quota 指标，没有实例配额的区域直接跳过"""
        for quota in quotas:
            instance = quota.instance
            if instance is None:
                logger.debug(f"[采集] 区域 {quota.region} 没有实例配额，跳过")
                summary['skipped_quotas'] += 1
                continue

            for resource, used_field, max_field in QUOTA_RESOURCES:
                labels = {'region': quota.region, 'resource': resource}
                self.metrics.set(QUOTA_USED, labels, getattr(instance, used_field))
                self.metrics.set(QUOTA_MAX, labels, getattr(instance, max_field))
            summary['quotas'] += 1
