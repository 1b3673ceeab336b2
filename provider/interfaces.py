# -*- coding: utf-8 -*-
"""
Provider 接口定义

功能：
- 定义 ProjectProvider 接口
- Collector 只依赖接口，不关心具体的云厂商 SDK
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from collector.fetch_result import FetchResult


class ProjectProvider(ABC):
    """
    项目资源接口

    功能：
    - 拉取对象存储容器列表
    - 拉取按区域划分的资源配额
    - fetch_* 方法不抛出异常，错误通过 FetchResult 返回
    """

    @abstractmethod
    def whoami(self) -> Dict[str, Any]:
        """
        身份校验

        Returns:
            账号信息字典

        Raises:
            Exception: 凭证无效或 API 不可达
        """
        pass

    @abstractmethod
    def fetch_containers(self, project_id: str) -> FetchResult:
        """
        获取项目的对象存储容器列表

        Args:
            project_id: 项目 ID

        Returns:
            FetchResult，items 为 ContainerSummary 列表
        """
        pass

    @abstractmethod
    def fetch_quotas(self, project_id: str) -> FetchResult:
        """
        获取项目按区域划分的配额

        Args:
            project_id: 项目 ID

        Returns:
            FetchResult，items 为 QuotaEntry 列表
        """
        pass
