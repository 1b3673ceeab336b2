# tests/conftest.py
import sys
from pathlib import Path

import pytest

# 把仓库根目录加入 sys.path，使 "config" / "collector" 等顶层包可导入
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from collector.fetch_result import FetchResult
from collector.metrics import MetricRegistry
from provider.interfaces import ProjectProvider
from provider.ovh.models import ContainerSummary, InstanceQuota, QuotaEntry


class FakeProvider(ProjectProvider):
    """按预设返回结果的 Provider，记录调用次数"""

    def __init__(self, containers=None, quotas=None):
        self.containers = containers if containers is not None else FetchResult.success('containers', [])
        self.quotas = quotas if quotas is not None else FetchResult.success('quotas', [])
        self.calls = []

    def whoami(self):
        return {'nichandle': 'ab12345-ovh'}

    def fetch_containers(self, project_id):
        self.calls.append(('containers', project_id))
        if isinstance(self.containers, Exception):
            raise self.containers
        return self.containers

    def fetch_quotas(self, project_id):
        self.calls.append(('quotas', project_id))
        if isinstance(self.quotas, Exception):
            raise self.quotas
        return self.quotas


def samples(metric_registry, name):
    """返回指定名称的全部样本"""
    return [
        sample
        for family in metric_registry.registry.collect()
        for sample in family.samples
        if sample.name == name
    ]


@pytest.fixture
def metric_registry():
    return MetricRegistry(default_metrics=False)


@pytest.fixture
def archive_container():
    return ContainerSummary(name='archive', region='GRA', stored_bytes=1024, stored_objects=4)


@pytest.fixture
def sbg_quota():
    return QuotaEntry(
        region='SBG',
        instance=InstanceQuota(
            used_cores=2, max_cores=10,
            used_instances=1, max_instances=5,
            used_ram=4096, max_ram=16384,
        ),
    )


@pytest.fixture
def waw_quota():
    return QuotaEntry(region='WAW', instance=None)
