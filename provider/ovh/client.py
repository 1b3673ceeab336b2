# -*- coding: utf-8 -*-
"""
OVH API 客户端模块

功能：
- 封装 OVH API 调用（请求签名和 HTTP 传输由 ovh SDK 完成）
- 身份校验（GET /me）
- 获取 Swift 容器列表和项目配额
- 不做重试、不做缓存，每次调用都是一次新的网络请求
"""

import ovh
import logging
from ovh.exceptions import APIError
from typing import Any, Callable, Dict, List, Optional

from collector.fetch_result import FetchResult
from provider.interfaces import ProjectProvider
from provider.ovh.models import ContainerSummary, QuotaEntry

logger = logging.getLogger(__name__)

RESOURCE_CONTAINERS = 'containers'
RESOURCE_QUOTAS = 'quotas'


class OVHClient(ProjectProvider):
    """
    OVH API 客户端

    功能：
    - 调用 /me 校验凭证
    - 调用 /cloud/project/{id}/storage 获取 Swift 容器
    - 调用 /cloud/project/{id}/quota 获取区域配额
    """

    def __init__(
        self,
        endpoint: str = 'ovh-us',
        application_key: str = None,
        application_secret: str = None,
        consumer_key: str = None,
        timeout: int = 180,
        client: Optional[Any] = None
    ):
        """
        初始化 OVH 客户端

        Args:
            endpoint: API endpoint（如 ovh-eu / ovh-us / ovh-ca）
            application_key: Application Key
            application_secret: Application Secret
            consumer_key: Consumer Key
            timeout: 请求超时（秒）
            client: 已创建的 SDK 客户端（可选，主要用于测试）
        """
        self.endpoint = endpoint
        if client is not None:
            self.client = client
            return

        try:
            self.client = ovh.Client(
                endpoint=endpoint,
                application_key=application_key,
                application_secret=application_secret,
                consumer_key=consumer_key,
                timeout=timeout
            )
            logger.debug(f"OVH 客户端初始化成功，endpoint: {endpoint}")
        except Exception as e:
            logger.error(f"初始化 OVH 客户端失败: {e}")
            raise

    @classmethod
    def from_config(cls, config) -> 'OVHClient':
        """根据 ExporterConfig 创建客户端"""
        return cls(
            endpoint=config.endpoint,
            application_key=config.application_key,
            application_secret=config.application_secret,
            consumer_key=config.consumer_key,
            timeout=config.timeout
        )

    def whoami(self) -> Dict[str, Any]:
        """
        身份校验

        Returns:
            账号信息字典（包含 nichandle）

        Raises:
            APIError: 凭证无效、网络错误等
        """
        logger.debug(f"调用 GET /me, endpoint={self.endpoint}")
        return self.client.get('/me')

    def fetch_containers(self, project_id: str) -> FetchResult:
        """
        获取 Swift 容器列表

        Args:
            project_id: 项目 ID

        Returns:
            FetchResult，items 为 ContainerSummary 列表
        """
        return self._fetch(
            RESOURCE_CONTAINERS,
            f'/cloud/project/{project_id}/storage',
            ContainerSummary.from_api
        )

    def fetch_quotas(self, project_id: str) -> FetchResult:
        """
        获取项目配额（按区域）

        Args:
            project_id: 项目 ID

        Returns:
            FetchResult，items 为 QuotaEntry 列表
        """
        return self._fetch(
            RESOURCE_QUOTAS,
            f'/cloud/project/{project_id}/quota',
            QuotaEntry.from_api
        )

    def _fetch(self, resource: str, path: str, parse: Callable[[Dict[str, Any]], Any]) -> FetchResult:
        """
        发起一次 GET 请求并解析结果

        所有错误都转换为失败的 FetchResult，不向上抛出
        """
        try:
            logger.debug(f"调用 GET {path}")
            response = self.client.get(path)
        except APIError as e:
            logger.error(f"OVH API 错误: resource={resource}, path={path}, error={type(e).__name__}: {e}")
            return FetchResult.failed(resource, f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.error(f"请求失败: resource={resource}, path={path}, error={e}")
            return FetchResult.failed(resource, f"{type(e).__name__}: {e}")

        if not isinstance(response, list):
            logger.error(f"响应格式错误: resource={resource}, path={path}, 期望列表，实际 {type(response).__name__}")
            return FetchResult.failed(resource, f"unexpected response type: {type(response).__name__}")

        items: List[Any] = []
        try:
            for raw in response:
                items.append(parse(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"解析响应失败: resource={resource}, path={path}, error={type(e).__name__}: {e}")
            return FetchResult.failed(resource, f"malformed response: {type(e).__name__}: {e}")

        logger.debug(f"获取 {resource} 成功: {len(items)} 条记录")
        return FetchResult.success(resource, items)
