#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OVH Project Exporter 主程序入口

功能：
- 从环境变量加载配置，校验 OVH 凭证（GET /me）
- 启动后台定时采集（Swift 容器 + 项目配额）
- 启动 HTTP 服务器，任意路径都返回 Prometheus 指标
- 收到 SIGINT / SIGTERM 时停止采集并关闭监听
"""

import logging
import signal
import sys
import threading
from typing import Optional

from config.loader import ExporterConfig, load_config, print_config
from config.validator import validate_config
from collector import MetricRegistry, ProjectCollector
from provider.ovh import OVHClient
from scheduler import CollectionScheduler
from server import create_app, ExporterLifecycle

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO'):
    """配置日志"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # 减少 werkzeug 请求日志
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


def check_identity(provider: OVHClient, lifecycle: Optional[ExporterLifecycle] = None) -> str:
    """
    身份校验，失败时停止 Exporter 并退出进程（状态码 1）

    Args:
        provider: OVH 客户端
        lifecycle: 已启动的 Exporter（可选），失败时先停止

    Returns:
        账号 nichandle
    """
    try:
        me = provider.whoami()
    except Exception as e:
        logger.error(f"error connecting to OVH API: {e}")
        if lifecycle is not None:
            lifecycle.stop()
        sys.exit(1)

    nichandle = me.get('nichandle', 'unknown') if isinstance(me, dict) else 'unknown'
    logger.info(f"connected to OVH API: {nichandle}")
    return nichandle


def build_exporter(config: ExporterConfig, provider: OVHClient) -> ExporterLifecycle:
    """
    构建 Exporter 上下文（注册表、采集器、定时任务、HTTP 应用）

    所有组件只创建一次，显式传递，不使用模块级全局变量

    Args:
        config: Exporter 配置
        provider: OVH 客户端

    Returns:
        ExporterLifecycle 对象
    """
    metric_registry = MetricRegistry()
    project_collector = ProjectCollector(provider, metric_registry, config.project_id)
    scheduler = CollectionScheduler(
        collect_func=project_collector.collect,
        interval=config.interval_seconds
    )
    app = create_app(metric_registry)
    return ExporterLifecycle(scheduler, app, host=config.host, port=config.port)


def main():
    """
    主函数

    功能：
    1. 加载并验证配置
    2. 启动定时采集和 HTTP 服务器
    3. 校验 OVH 凭证（失败时退出）
    4. 等待终止信号
    """
    setup_logging()

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"加载配置失败: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))
    logger.info("Starting OVH Project Exporter...")
    print_config(config)

    is_valid, error_message = validate_config(config)
    if not is_valid:
        # 不在这里退出，由身份校验决定是否致命
        logger.warning(f"配置不完整: {error_message}")

    try:
        provider = OVHClient.from_config(config)
    except Exception as e:
        logger.error(f"error connecting to OVH API: {e}")
        sys.exit(1)

    lifecycle = build_exporter(config, provider)

    shutdown_requested = threading.Event()

    def handle_signal(signum, frame):
        logger.info(f"收到信号 {signal.Signals(signum).name}")
        shutdown_requested.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        lifecycle.start()
    except OSError as e:
        logger.error(f"HTTP 服务器启动失败 (port {config.port}): {e}")
        lifecycle.stop()
        sys.exit(1)

    # 身份校验不阻塞首次采集和监听，失败时再停止并退出
    check_identity(provider, lifecycle)

    # 带超时等待，保证主线程能及时处理信号
    while not shutdown_requested.wait(1):
        pass

    lifecycle.stop()


if __name__ == '__main__':
    main()
