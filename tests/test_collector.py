from collector.collector import ProjectCollector
from collector.fetch_result import FetchResult
from provider.ovh.models import ContainerSummary, QuotaEntry

from conftest import FakeProvider, samples


def _collector(provider, metric_registry):
    return ProjectCollector(provider, metric_registry, 'p-1')


def _values(metric_registry, name):
    return {tuple(sorted(s.labels.items())): s.value for s in samples(metric_registry, name)}


def test_every_container_gets_one_label_combination(metric_registry):
    containers = [ContainerSummary(f'bucket-{i}', 'GRA', i * 100, i) for i in range(5)]
    provider = FakeProvider(containers=FetchResult.success('containers', containers))

    summary = _collector(provider, metric_registry).collect()

    assert summary['containers'] == 5
    assert len(samples(metric_registry, 'swift_bucket_bytes_total')) == 5
    assert len(samples(metric_registry, 'swift_bucket_objects_total')) == 5
    for i in range(5):
        labels = {'bucket': f'bucket-{i}', 'region': 'GRA'}
        assert metric_registry.get_sample_value('swift_bucket_bytes_total', labels) == i * 100
        assert metric_registry.get_sample_value('swift_bucket_objects_total', labels) == i


def test_fetches_use_configured_project(metric_registry):
    provider = FakeProvider()
    _collector(provider, metric_registry).collect()
    assert sorted(provider.calls) == [('containers', 'p-1'), ('quotas', 'p-1')]


def test_quota_with_instance_sets_six_values(metric_registry, sbg_quota):
    provider = FakeProvider(quotas=FetchResult.success('quotas', [sbg_quota]))

    summary = _collector(provider, metric_registry).collect()

    assert summary['quotas'] == 1
    used = samples(metric_registry, 'project_quota_used')
    maximum = samples(metric_registry, 'project_quota_max')
    assert len(used) + len(maximum) == 6
    expected = {'cores': (2, 10), 'instances': (1, 5), 'memory': (4096, 16384)}
    for resource, (used_value, max_value) in expected.items():
        labels = {'region': 'SBG', 'resource': resource}
        assert metric_registry.get_sample_value('project_quota_used', labels) == used_value
        assert metric_registry.get_sample_value('project_quota_max', labels) == max_value


def test_quota_without_instance_writes_nothing(metric_registry, waw_quota):
    provider = FakeProvider(quotas=FetchResult.success('quotas', [waw_quota]))

    summary = _collector(provider, metric_registry).collect()

    assert summary['skipped_quotas'] == 1
    assert summary['failed'] == []
    assert samples(metric_registry, 'project_quota_used') == []
    assert samples(metric_registry, 'project_quota_max') == []


def test_null_instance_leaves_previous_region_values(metric_registry, sbg_quota):
    collector = ProjectCollector(
        FakeProvider(quotas=FetchResult.success('quotas', [sbg_quota])), metric_registry, 'p-1'
    )
    collector.collect()
    before = _values(metric_registry, 'project_quota_used')

    collector.provider = FakeProvider(quotas=FetchResult.success('quotas', [
        QuotaEntry(region='SBG', instance=None),
    ]))
    collector.collect()

    assert _values(metric_registry, 'project_quota_used') == before


def test_two_identical_cycles_equal_one(metric_registry, archive_container, sbg_quota, waw_quota):
    provider = FakeProvider(
        containers=FetchResult.success('containers', [archive_container]),
        quotas=FetchResult.success('quotas', [sbg_quota, waw_quota]),
    )
    collector = _collector(provider, metric_registry)

    collector.collect()
    first = {name: _values(metric_registry, name) for name in (
        'swift_bucket_bytes_total', 'swift_bucket_objects_total',
        'project_quota_used', 'project_quota_max')}
    collector.collect()
    second = {name: _values(metric_registry, name) for name in first}

    assert first == second


def test_quota_failure_does_not_affect_containers(metric_registry, archive_container, sbg_quota):
    collector = _collector(FakeProvider(
        containers=FetchResult.success('containers', [ContainerSummary('archive', 'GRA', 1, 1)]),
        quotas=FetchResult.success('quotas', [sbg_quota]),
    ), metric_registry)
    collector.collect()
    quotas_before = _values(metric_registry, 'project_quota_max')

    collector.provider = FakeProvider(
        containers=FetchResult.success('containers', [archive_container]),
        quotas=FetchResult.failed('quotas', 'APIError: boom'),
    )
    summary = collector.collect()

    assert summary['failed'] == ['quotas']
    assert metric_registry.get_sample_value(
        'swift_bucket_bytes_total', {'bucket': 'archive', 'region': 'GRA'}) == 1024
    assert _values(metric_registry, 'project_quota_max') == quotas_before
    assert metric_registry.get_sample_value(
        'ovh_exporter_collect_errors_total', {'resource': 'quotas'}) == 1


def test_quota_failure_before_any_success_leaves_quotas_absent(metric_registry, archive_container):
    provider = FakeProvider(
        containers=FetchResult.success('containers', [archive_container]),
        quotas=FetchResult.failed('quotas', 'HTTPError: timeout'),
    )

    _collector(provider, metric_registry).collect()

    assert samples(metric_registry, 'project_quota_used') == []
    assert len(samples(metric_registry, 'swift_bucket_bytes_total')) == 1


def test_unexpected_exception_is_isolated(metric_registry, sbg_quota):
    provider = FakeProvider(
        containers=RuntimeError('unexpected'),
        quotas=FetchResult.success('quotas', [sbg_quota]),
    )

    summary = _collector(provider, metric_registry).collect()

    assert summary['failed'] == ['containers']
    assert metric_registry.get_sample_value(
        'project_quota_used', {'region': 'SBG', 'resource': 'cores'}) == 2
    assert metric_registry.get_sample_value(
        'ovh_exporter_collect_errors_total', {'resource': 'containers'}) == 1


def test_deleted_bucket_keeps_last_value(metric_registry, archive_container):
    collector = _collector(FakeProvider(
        containers=FetchResult.success('containers', [archive_container]),
    ), metric_registry)
    collector.collect()

    collector.provider = FakeProvider(containers=FetchResult.success('containers', []))
    collector.collect()

    assert metric_registry.get_sample_value(
        'swift_bucket_bytes_total', {'bucket': 'archive', 'region': 'GRA'}) == 1024


def test_success_records_timestamp_and_duration(metric_registry):
    _collector(FakeProvider(), metric_registry).collect()

    assert metric_registry.get_sample_value(
        'ovh_exporter_last_success_timestamp_seconds', {'resource': 'containers'}) > 0
    assert metric_registry.get_sample_value('ovh_exporter_collect_duration_seconds_count') == 1
