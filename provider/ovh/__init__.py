# -*- coding: utf-8 -*-
"""
OVH Provider 模块

功能：
- 封装 OVH API 调用（身份校验、Swift 容器、项目配额）
- 将 API 响应解析为类型化对象
"""

from .client import OVHClient
from .models import ContainerSummary, InstanceQuota, QuotaEntry

__all__ = ['OVHClient', 'ContainerSummary', 'InstanceQuota', 'QuotaEntry']
