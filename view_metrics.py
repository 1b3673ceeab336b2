#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
查看 Exporter 暴露的 Swift / 配额指标

功能：
1. 从 metrics 端点获取所有指标
2. 按 Region 统计 bucket 和配额
3. 显示 bucket 明细和配额使用率
"""

import os
import sys
import urllib.request
from collections import defaultdict
from prometheus_client.parser import text_string_to_metric_families

DEFAULT_URL = 'http://localhost:3000/metrics'

BUCKET_METRICS = ('swift_bucket_bytes_total', 'swift_bucket_objects_total')
QUOTA_METRICS = ('project_quota_used', 'project_quota_max')


def fetch_metrics(url=None):
    """从 metrics 端点获取指标"""
    url = url or os.getenv('EXPORTER_URL', DEFAULT_URL)
    try:
        with urllib.request.urlopen(url, timeout=10) as response:
            return response.read().decode('utf-8')
    except Exception as e:
        print(f"❌ 无法连接到 exporter: {e}")
        print("   请确保 exporter 正在运行: python3 main.py")
        return None


def parse_metrics(metrics_text):
    """
    解析 metrics 文本

    Returns:
        {'buckets': {(bucket, region): {metric: value}},
         'quotas': {(region, resource): {metric: value}}}
    """
    parsed = {
        'buckets': defaultdict(dict),
        'quotas': defaultdict(dict)
    }

    for family in text_string_to_metric_families(metrics_text):
        for sample in family.samples:
            if sample.name in BUCKET_METRICS:
                key = (sample.labels.get('bucket', ''), sample.labels.get('region', ''))
                parsed['buckets'][key][sample.name] = sample.value
            elif sample.name in QUOTA_METRICS:
                key = (sample.labels.get('region', ''), sample.labels.get('resource', ''))
                parsed['quotas'][key][sample.name] = sample.value

    return parsed


def usage_percent(used, maximum):
    """配额使用率（maximum 为 0 或缺失时返回 None）"""
    if used is None or not maximum:
        return None
    return used / maximum * 100.0


def format_bytes(value):
    """字节数格式化"""
    units = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB']
    size = float(value)
    for unit in units:
        if size < 1024 or unit == units[-1]:
            return f"{size:.1f} {unit}"
        size /= 1024


def view_summary(parsed):
    """查看汇总信息"""
    print("=" * 60)
    print("OVH 项目指标汇总")
    print("=" * 60)

    bucket_regions = defaultdict(lambda: {'count': 0, 'bytes': 0.0, 'objects': 0.0})
    for (bucket, region), values in parsed['buckets'].items():
        stats = bucket_regions[region]
        stats['count'] += 1
        stats['bytes'] += values.get('swift_bucket_bytes_total', 0.0)
        stats['objects'] += values.get('swift_bucket_objects_total', 0.0)

    print(f"\nBucket 总数: {len(parsed['buckets'])}")
    for region, stats in sorted(bucket_regions.items()):
        print(f"  - {region}: {stats['count']} 个, {format_bytes(stats['bytes'])}, {int(stats['objects'])} 个对象")

    quota_regions = sorted({region for region, _ in parsed['quotas']})
    print(f"\n配额 Region 数: {len(quota_regions)}")
    if quota_regions:
        print(f"Region 列表: {quota_regions}")


def view_buckets(parsed, region=None):
    """查看 bucket 明细"""
    print("=" * 60)
    print(f"Bucket 明细{f' (Region: {region})' if region else ''}")
    print("=" * 60)

    for (bucket, bucket_region), values in sorted(parsed['buckets'].items()):
        if region and bucket_region != region:
            continue
        size = values.get('swift_bucket_bytes_total', 0.0)
        objects = values.get('swift_bucket_objects_total', 0.0)
        print(f"  {bucket_region:<8} {bucket:<40} {format_bytes(size):>12} {int(objects):>10} 个对象")


def view_quotas(parsed, region=None):
    """查看配额使用率"""
    print("=" * 60)
    print(f"配额使用情况{f' (Region: {region})' if region else ''}")
    print("=" * 60)

    for (quota_region, resource), values in sorted(parsed['quotas'].items()):
        if region and quota_region != region:
            continue
        used = values.get('project_quota_used')
        maximum = values.get('project_quota_max')
        percent = usage_percent(used, maximum)
        percent_text = f"{percent:.1f}%" if percent is not None else 'N/A'
        print(f"  {quota_region:<8} {resource:<10} {used} / {maximum} ({percent_text})")


def main():
    """主函数"""
    command = sys.argv[1] if len(sys.argv) > 1 else 'summary'
    region = sys.argv[2] if len(sys.argv) > 2 else None

    if command not in ('summary', 'buckets', 'quotas'):
        print("用法:")
        print("  python3 view_metrics.py summary            # 查看汇总")
        print("  python3 view_metrics.py buckets [Region]   # 查看 bucket 明细")
        print("  python3 view_metrics.py quotas [Region]    # 查看配额使用率")
        return

    metrics_text = fetch_metrics()
    if not metrics_text:
        sys.exit(1)

    parsed = parse_metrics(metrics_text)

    if command == 'summary':
        view_summary(parsed)
    elif command == 'buckets':
        view_buckets(parsed, region)
    else:
        view_quotas(parsed, region)


if __name__ == '__main__':
    main()
