from __future__ import annotations

import asyncio

import httpx
import pytest

from detector_api.config.settings import ClientConfig
from detector_api.transport.dispatcher import Dispatcher
from detector_api.transport.errors import APIError, RequestTimeout, TransportError


def _dispatcher(handler, **kwargs) -> Dispatcher:
    config = ClientConfig(
        base_url='https://api.example.test',
        auth_token='tok',
        transport=httpx.MockTransport(handler),
        **kwargs,
    )
    return Dispatcher(config)


def test_dispatch_builds_authenticated_request():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{}')

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            response = await dispatcher.dispatch(
                'post', 'v2/detector', {'limit': '10'}, b'{"name":"x"}', content_type='application/json'
            )
            await response.aclose()
            return response

    response = asyncio.run(scenario())
    assert response.status_code == 200
    request = seen[0]
    assert request.method == 'POST'
    assert request.url.path == '/v2/detector'
    assert request.url.params['limit'] == '10'
    assert request.headers['X-SF-Token'] == 'tok'
    assert request.headers['Content-Type'] == 'application/json'
    assert request.content == b'{"name":"x"}'


def test_dispatch_without_body_sets_no_content_type():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            response = await dispatcher.dispatch('DELETE', '/v2/detector/abc')
            await response.aclose()

    asyncio.run(scenario())
    assert 'content-type' not in seen[0].headers
    assert seen[0].url.query == b''


def test_dispatch_omits_token_header_when_unset():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async def scenario():
        config = ClientConfig(base_url='https://api.example.test', transport=httpx.MockTransport(handler))
        async with Dispatcher(config) as dispatcher:
            response = await dispatcher.dispatch('GET', '/v2/incident')
            await response.aclose()

    asyncio.run(scenario())
    assert 'X-SF-Token' not in seen[0].headers


def test_dispatch_rejects_unknown_verb():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - never sent
        raise AssertionError('request should not be sent')

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            await dispatcher.dispatch('PATCH', '/v2/detector')

    with pytest.raises(ValueError):
        asyncio.run(scenario())


def test_connection_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError('connection refused', request=request)

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            await dispatcher.dispatch('GET', '/v2/detector/abc')

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(scenario())
    assert not isinstance(excinfo.value, APIError)
    assert excinfo.value.method == 'GET'


def test_transport_timeout_is_request_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout('timed out', request=request)

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            await dispatcher.dispatch('GET', '/v2/detector/abc')

    with pytest.raises(RequestTimeout):
        asyncio.run(scenario())


def test_independent_dispatchers_keep_their_own_config():
    tokens: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        tokens.append(request.headers['X-SF-Token'])
        return httpx.Response(204)

    async def call(dispatcher: Dispatcher) -> None:
        response = await dispatcher.dispatch('GET', '/v2/incident')
        await response.aclose()

    async def scenario():
        first = Dispatcher(ClientConfig(base_url='https://a.test', auth_token='one', transport=httpx.MockTransport(handler)))
        second = Dispatcher(ClientConfig(base_url='https://b.test', auth_token='two', transport=httpx.MockTransport(handler)))
        async with first, second:
            await asyncio.gather(call(first), call(second), call(first))

    asyncio.run(scenario())
    assert sorted(tokens) == ['one', 'one', 'two']


def test_dispatch_drops_unset_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            response = await dispatcher.dispatch('GET', '/v2/detector', {'limit': '5', 'tags': None})
            await response.aclose()

    asyncio.run(scenario())
    assert dict(seen[0].url.params) == {'limit': '5'}


def test_other_request_errors_are_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.TooManyRedirects('redirect loop', request=request)

    async def scenario():
        async with _dispatcher(handler) as dispatcher:
            await dispatcher.dispatch('GET', '/v2/detector/abc')

    with pytest.raises(TransportError):
        asyncio.run(scenario())
