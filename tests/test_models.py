import pytest

from provider.ovh.models import ContainerSummary, InstanceQuota, QuotaEntry


def test_container_from_api():
    container = ContainerSummary.from_api({
        'id': 'abc', 'name': 'archive', 'region': 'GRA',
        'storedBytes': 1024, 'storedObjects': 4,
    })
    assert container == ContainerSummary('archive', 'GRA', 1024, 4)


def test_container_negative_count_is_rejected():
    with pytest.raises(ValueError):
        ContainerSummary.from_api({'name': 'x', 'region': 'GRA', 'storedBytes': -1, 'storedObjects': 0})


def test_container_missing_field_is_rejected():
    with pytest.raises(KeyError):
        ContainerSummary.from_api({'name': 'x', 'region': 'GRA', 'storedBytes': 1})


def test_quota_with_instance_accepts_api_ram_spelling():
    entry = QuotaEntry.from_api({
        'region': 'SBG',
        'instance': {
            'usedCores': 2, 'maxCores': 10,
            'usedInstances': 1, 'maxInstances': 5,
            'usedRAM': 4096, 'maxRam': 16384,
        },
        'volume': None,
    })
    assert entry.region == 'SBG'
    assert entry.instance == InstanceQuota(2, 10, 1, 5, 4096, 16384)


def test_quota_with_uppercase_max_ram():
    entry = QuotaEntry.from_api({
        'region': 'SBG',
        'instance': {
            'usedCores': 0, 'maxCores': 1,
            'usedInstances': 0, 'maxInstances': 1,
            'usedRAM': 0, 'maxRAM': 2048,
        },
    })
    assert entry.instance.max_ram == 2048


def test_quota_without_instance():
    assert QuotaEntry.from_api({'region': 'WAW', 'instance': None}) == QuotaEntry('WAW', None)
    assert QuotaEntry.from_api({'region': 'WAW'}).instance is None
