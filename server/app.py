# -*- coding: utf-8 -*-
"""
Prometheus 抓取端点

功能：
- 单一 catch-all 路由，不区分路径和方法
- 返回当前指标注册表的 text format 快照
- 渲染失败时返回 500，不影响进程和采集
"""

import logging
from flask import Flask

from collector.metrics import MetricRegistry

logger = logging.getLogger(__name__)

SCRAPE_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_app(metric_registry: MetricRegistry) -> Flask:
    """
    创建 Flask 应用

    Args:
        metric_registry: 指标注册表

    Returns:
        Flask 应用
    """
    app = Flask(__name__)

    @app.route('/', defaults={'path': ''}, methods=SCRAPE_METHODS)
    @app.route('/<path:path>', methods=SCRAPE_METHODS)
    def metrics(path):
        """
        Prometheus metrics 端点

        返回所有 bucket / quota 指标及进程默认指标
        """
        logger.debug(f"serving metrics: /{path}")
        try:
            metrics_data = metric_registry.render()
        except Exception as e:
            logger.error(f"渲染指标失败: {e}", exc_info=True)
            return "# error rendering metrics\n", 500, {'Content-Type': 'text/plain; charset=utf-8'}

        return metrics_data, 200, {'Content-Type': metric_registry.content_type}

    return app
