# -*- coding: utf-8 -*-
"""
Exporter 配置加载模块

功能：
- 从环境变量加载 OVH API 凭证、项目 ID、采集间隔和监听端口
- 支持可选的 YAML 配置文件（环境变量优先级更高）
- 定义不可变的配置数据结构（ExporterConfig）
"""

import os
import yaml
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# 未配置凭证时使用的占位字符串（不会在启动时直接失败，由身份校验暴露问题）
APP_KEY_PLACEHOLDER = 'app key required'
APP_SECRET_PLACEHOLDER = 'app secret required'
CONSUMER_KEY_PLACEHOLDER = 'consumer key required'
PROJECT_ID_PLACEHOLDER = 'project id required'

PLACEHOLDERS = (
    APP_KEY_PLACEHOLDER,
    APP_SECRET_PLACEHOLDER,
    CONSUMER_KEY_PLACEHOLDER,
    PROJECT_ID_PLACEHOLDER,
)

DEFAULT_CONFIG_PATH = 'config/exporter.yaml'

# 环境变量 -> 配置字段
ENV_MAPPING = {
    'OVH_ENDPOINT': 'endpoint',
    'OVH_APP': 'application_key',
    'OVH_SECRET': 'application_secret',
    'OVH_CONSUMER': 'consumer_key',
    'OVH_PROJECT': 'project_id',
    'OVH_INTERVAL': 'interval_ms',
    'OVH_TIMEOUT': 'timeout',
    'PORT': 'port',
    'HOST': 'host',
    'LOG_LEVEL': 'log_level',
}

INT_FIELDS = ('interval_ms', 'port', 'timeout')


@dataclass(frozen=True)
class ExporterConfig:
    """Exporter 配置（启动时加载一次，之后不再修改）"""
    endpoint: str = 'ovh-us'                               # OVH API endpoint，如 ovh-us / ovh-eu / ovh-ca
    application_key: str = APP_KEY_PLACEHOLDER             # Application Key
    application_secret: str = APP_SECRET_PLACEHOLDER       # Application Secret
    consumer_key: str = CONSUMER_KEY_PLACEHOLDER           # Consumer Key
    project_id: str = PROJECT_ID_PLACEHOLDER               # Public Cloud 项目 ID
    interval_ms: int = 600000                              # 采集间隔（毫秒），默认 10 分钟
    port: int = 3000                                       # HTTP 监听端口
    host: str = '0.0.0.0'                                  # HTTP 监听地址
    timeout: int = 180                                     # API 请求超时（秒）
    log_level: str = 'INFO'                                # 日志级别

    @property
    def interval_seconds(self) -> float:
        """采集间隔（秒）"""
        return self.interval_ms / 1000.0


def load_config(env: Optional[Mapping[str, str]] = None, config_path: Optional[str] = None) -> ExporterConfig:
    """
    加载 Exporter 配置

    优先级：环境变量 > YAML 配置文件 > 默认值

    Args:
        env: 环境变量映射（默认 os.environ）
        config_path: YAML 配置文件路径（默认读取 EXPORTER_CONFIG，
                     未设置时若 config/exporter.yaml 存在则使用）

    Returns:
        ExporterConfig 对象

    Raises:
        FileNotFoundError: 显式指定的配置文件不存在
        ValueError: 配置格式错误或数值字段无法解析，或 interval_ms 不是正数
    """
    if env is None:
        env = os.environ

    explicit = config_path or env.get('EXPORTER_CONFIG')
    values: Dict[str, Any] = {}

    if explicit:
        if not os.path.exists(explicit):
            raise FileNotFoundError(f"配置文件不存在: {explicit}")
        values.update(_load_yaml(explicit))
    elif os.path.exists(DEFAULT_CONFIG_PATH):
        values.update(_load_yaml(DEFAULT_CONFIG_PATH))

    for env_name, field_name in ENV_MAPPING.items():
        raw = env.get(env_name)
        # 空字符串视为未设置，与默认占位行为一致
        if raw:
            values[field_name] = raw

    for field_name in INT_FIELDS:
        if field_name in values:
            values[field_name] = _parse_int(field_name, values[field_name])

    # 采集间隔必须为正数
    if 'interval_ms' in values and values['interval_ms'] <= 0:
        raise ValueError(f"interval_ms 必须是正整数，当前值: {values['interval_ms']}")

    if 'log_level' in values:
        values['log_level'] = str(values['log_level']).upper()

    return replace(ExporterConfig(), **values)


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    读取 YAML 配置文件

    Args:
        path: 文件路径

    Returns:
        配置字段字典（只保留已知字段）

    Raises:
        ValueError: YAML 解析失败或格式错误
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"YAML 解析失败: {path}: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"配置格式错误: {path} 顶层必须是字典类型")

    known = set(ENV_MAPPING.values())
    unknown = [key for key in data if key not in known]
    if unknown:
        raise ValueError(f"配置格式错误: 未知字段 {', '.join(sorted(str(k) for k in unknown))}")

    logger.debug(f"从配置文件加载 {len(data)} 个字段: {path}")
    return dict(data)


def _parse_int(field_name: str, raw: Any) -> int:
    """将配置值解析为整数"""
    if isinstance(raw, bool):
        raise ValueError(f"{field_name} 必须是整数，当前值: {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} 必须是整数，当前值: {raw!r}")


def print_config(config: ExporterConfig):
    """
    打印配置（凭证脱敏）

    Args:
        config: ExporterConfig 对象
    """
    logger.info("=" * 60)
    logger.info("Exporter 配置")
    logger.info("=" * 60)
    logger.info(f"  endpoint: {config.endpoint}")
    logger.info(f"  application_key: {_mask(config.application_key)}")
    logger.info(f"  application_secret: {_mask(config.application_secret)}")
    logger.info(f"  consumer_key: {_mask(config.consumer_key)}")
    logger.info(f"  project_id: {config.project_id}")
    logger.info(f"  interval: {config.interval_ms} ms")
    logger.info(f"  listen: {config.host}:{config.port}")
    logger.info(f"  timeout: {config.timeout} s")
    logger.info("=" * 60)


def _mask(value: str) -> str:
    if value in PLACEHOLDERS:
        return value
    if len(value) <= 4:
        return '****'
    return value[:4] + '****'
