# -*- coding: utf-8 -*-
"""
资源拉取结果数据结构

功能：
- 定义单次 API 拉取的状态（成功 / 失败）
- 统一承载拉取到的数据或错误信息，调用方无需捕获异常
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional
from enum import Enum


class FetchStatus(Enum):
    """拉取状态"""
    SUCCESS = "success"    # 成功获取数据
    FAILED = "failed"      # 拉取失败（网络错误、API 错误或响应格式错误）


@dataclass
class FetchResult:
    """单个资源的拉取结果"""
    resource: str                               # 资源类型：containers / quotas
    status: FetchStatus                         # 拉取状态
    items: List[Any] = field(default_factory=list)  # 解析后的记录（success 时）
    error: Optional[str] = None                 # 错误信息（failed 时）

    @classmethod
    def success(cls, resource: str, items: List[Any]) -> 'FetchResult':
        return cls(resource=resource, status=FetchStatus.SUCCESS, items=list(items))

    @classmethod
    def failed(cls, resource: str, error: str) -> 'FetchResult':
        return cls(resource=resource, status=FetchStatus.FAILED, error=error)

    def is_success(self) -> bool:
        """判断是否成功"""
        return self.status == FetchStatus.SUCCESS

    def is_failed(self) -> bool:
        """判断是否失败"""
        return self.status == FetchStatus.FAILED
