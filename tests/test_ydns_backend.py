"""Tests for the YDNS single-call update."""

import base64

import httpx
import pytest

from dnsupdate.backends.base import Outcome
from dnsupdate.backends.ydns import YDNSBackend
from dnsupdate.config import ConfigurationError


def make_backend(handler, **config):
    settings = {'user': 'alice', 'password': 's3cret', 'domains': ['test.example.com']}
    settings.update(config)
    return YDNSBackend(settings, transport=httpx.MockTransport(handler))


def test_update_sends_host_and_ip_with_basic_auth():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text='ok')

    backend = make_backend(handler)

    assert backend.update_subdomain('test.example.com', '203.0.113.5') is Outcome.SUCCESS

    (request,) = seen
    assert request.method == 'GET'
    assert request.url.host == 'ydns.io'
    assert request.url.path == '/api/v1/update/'
    assert request.url.params['host'] == 'test.example.com'
    assert request.url.params['ip'] == '203.0.113.5'
    expected = base64.b64encode(b'alice:s3cret').decode()
    assert request.headers['Authorization'] == f'Basic {expected}'


@pytest.mark.parametrize('status', [201, 204, 401, 400, 404, 500])
def test_non_200_status_fails(status):
    backend = make_backend(lambda request: httpx.Response(status, text='error'))

    assert backend.update_subdomain('test.example.com', '203.0.113.5') is Outcome.FAIL


def test_custom_api_url():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    backend = make_backend(handler, api_url='https://ydns.example.test/api/v1/')
    backend.update_subdomain('test.example.com', '203.0.113.5')

    assert str(seen[0].url).startswith('https://ydns.example.test/api/v1/update/?')


def test_update_walks_domains_in_order():
    hosts = []

    def handler(request):
        hosts.append(request.url.params['host'])
        return httpx.Response(200 if request.url.params['host'] != 'b.example.com' else 401)

    backend = make_backend(handler, domains=['a.example.com', 'b.example.com', 'c.example.com'])
    reported = []

    results = backend.update('203.0.113.5', on_result=reported.append)

    assert hosts == ['a.example.com', 'b.example.com', 'c.example.com']
    assert [r.outcome for r in results] == [Outcome.SUCCESS, Outcome.FAIL, Outcome.SUCCESS]
    assert reported == results


def test_connection_error_is_contained():
    def handler(request):
        raise httpx.ConnectTimeout('timed out', request=request)

    backend = make_backend(handler)

    (result,) = backend.update('203.0.113.5')
    assert result.outcome is Outcome.FAIL
    assert 'timed out' in result.detail


def test_missing_password_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        YDNSBackend({'user': 'alice', 'domains': ['test.example.com']})
