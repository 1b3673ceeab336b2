# -*- coding: utf-8 -*-
"""
配置验证模块

功能：
- 检查凭证和项目 ID 是否仍为占位字符串
- 验证端口范围（1-65535）和采集间隔
- 验证 log_level 取值
"""

from typing import Tuple

from config.loader import ExporterConfig, PLACEHOLDERS

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def validate_config(config: ExporterConfig) -> Tuple[bool, str]:
    """
    验证配置对象

    验证失败不会阻止启动，身份校验（/me）才是致命检查

    Args:
        config: 配置对象

    Returns:
        (is_valid, error_message) 元组
    """
    errors = []

    for field_name in ('application_key', 'application_secret', 'consumer_key', 'project_id'):
        value = getattr(config, field_name)
        if not value or value in PLACEHOLDERS:
            errors.append(f"{field_name} 未配置")

    if not 1 <= config.port <= 65535:
        errors.append(f"port 超出范围 (1-65535): {config.port}")

    if config.interval_ms <= 0:
        errors.append(f"interval_ms 必须是正整数: {config.interval_ms}")

    if config.timeout <= 0:
        errors.append(f"timeout 必须是正整数: {config.timeout}")

    if config.log_level not in VALID_LOG_LEVELS:
        errors.append(f"log_level 无效: {config.log_level}")

    if errors:
        return False, '; '.join(errors)
    return True, ''
