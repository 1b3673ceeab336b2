# -*- coding: utf-8 -*-
"""
Provider 模块

功能：
- 定义项目资源 Provider 接口
- 提供 OVH Public Cloud 实现
"""

from .interfaces import ProjectProvider

__all__ = ['ProjectProvider']
