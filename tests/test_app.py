import pytest

from collector.metrics import BUCKET_BYTES
from server.app import create_app


@pytest.fixture
def client(metric_registry):
    metric_registry.set(BUCKET_BYTES, {'bucket': 'archive', 'region': 'GRA'}, 1024)
    return create_app(metric_registry).test_client()


@pytest.mark.parametrize('method, path', [
    ('get', '/'),
    ('get', '/metrics'),
    ('get', '/any/nested/path'),
    ('post', '/metrics'),
])
def test_every_path_and_method_serves_metrics(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 200
    assert response.content_type.startswith('text/plain')
    assert b'swift_bucket_bytes_total{bucket="archive",region="GRA"} 1024.0' in response.data


def test_render_error_returns_500(metric_registry, monkeypatch):
    def broken():
        raise RuntimeError('render failed')

    monkeypatch.setattr(metric_registry, 'render', broken)
    client = create_app(metric_registry).test_client()

    response = client.get('/metrics')

    assert response.status_code == 500
    # 下一次抓取不受影响
    monkeypatch.undo()
    assert client.get('/metrics').status_code == 200
