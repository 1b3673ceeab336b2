# -*- coding: utf-8 -*-
"""
OVH API 响应数据结构

功能：
- 定义 Swift 容器和项目配额的数据结构
- 将 API 返回的 JSON 解析为类型化对象
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ContainerSummary:
    """Swift 容器（bucket）摘要"""
    name: str              # 容器名称
    region: str            # 区域，如 GRA / SBG
    stored_bytes: int      # 存储字节数
    stored_objects: int    # 对象数量

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ContainerSummary':
        """
        从 /cloud/project/{id}/storage 的单条记录解析

        Raises:
            KeyError: 缺少必填字段
            ValueError: 数值字段无效
        """
        return cls(
            name=str(data['name']),
            region=str(data['region']),
            stored_bytes=_non_negative(data['storedBytes'], 'storedBytes'),
            stored_objects=_non_negative(data['storedObjects'], 'storedObjects'),
        )


@dataclass(frozen=True)
class InstanceQuota:
    """区域内的计算实例配额"""
    used_cores: int
    max_cores: int
    used_instances: int
    max_instances: int
    used_ram: int
    max_ram: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'InstanceQuota':
        # API 中 RAM 字段大小写不一致（usedRAM / maxRam），两种写法都接受
        return cls(
            used_cores=_non_negative(data['usedCores'], 'usedCores'),
            max_cores=_non_negative(data['maxCores'], 'maxCores'),
            used_instances=_non_negative(data['usedInstances'], 'usedInstances'),
            max_instances=_non_negative(data['maxInstances'], 'maxInstances'),
            used_ram=_non_negative(_pick(data, 'usedRAM', 'usedRam'), 'usedRAM'),
            max_ram=_non_negative(_pick(data, 'maxRam', 'maxRAM'), 'maxRam'),
        )


@dataclass(frozen=True)
class QuotaEntry:
    """单个区域的项目配额"""
    region: str
    instance: Optional[InstanceQuota] = None   # 区域没有计算配额时为 None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'QuotaEntry':
        """
        从 /cloud/project/{id}/quota 的单条记录解析

        Raises:
            KeyError: 缺少必填字段
            ValueError: 数值字段无效
        """
        instance = data.get('instance')
        return cls(
            region=str(data['region']),
            instance=InstanceQuota.from_api(instance) if instance is not None else None,
        )


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise KeyError(keys[0])


def _non_negative(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field_name} 不是有效数值: {value!r}")
    number = int(value)
    if number < 0:
        raise ValueError(f"{field_name} 不能为负数: {number}")
    return number
