# -*- coding: utf-8 -*-
"""
配置模块

功能：
- 从环境变量和可选的 YAML 文件加载 Exporter 配置
- 验证配置（占位凭证、端口范围、采集间隔）
"""

from .loader import ExporterConfig, load_config, print_config
from .validator import validate_config

__all__ = ['ExporterConfig', 'load_config', 'print_config', 'validate_config']
