import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from sharelinks.types import LambdaEvent, LambdaContext, LambdaConfiguration
from sharelinks.lambdas.resolve_link import app
from sharelinks.models import MappingRecord
from sharelinks.exceptions import AppConfigError
from sharelinks.dao.exceptions import DataStoreError


LONG_URL = 'https://example.com/shared/abc123?x=1'


def make_event(share_id: str | None, method: str = 'GET') -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/s/{shareId}',
        'path': f'/s/{share_id}',
        'httpMethod': method,
        'pathParameters': {'shareId': share_id} if share_id is not None else None,
        'requestContext': {'domainName': 'example.com', 'stage': 'Prod'},
    })


class TestResolveLinkHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'resolve_link'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration, store) -> None:
        store.insert('V1StGXR8', MappingRecord(long_url=LONG_URL, schedule_id='abc123'))
        store.writes = 0

        self.load_config = MagicMock(return_value=config)
        self.dao_factory = MagicMock(return_value=store)
        monkeypatch.setattr(app, 'load_config', self.load_config)
        monkeypatch.setattr(app, 'ShareLinkRedisDAO', self.dao_factory)

        self.context = context
        self.store = store

    def assert_not_found(self, response: dict) -> None:
        assert response['statusCode'] == 404
        assert response['headers']['Content-Type'].startswith('text/html')
        assert 'This page could not be found.' in response['body']

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(make_event('V1StGXR8'), self.context)

        assert response['statusCode'] == 302
        assert response['headers']['Location'] == LONG_URL
        assert response['body'] == ''
        self.load_config.assert_called_once_with('resolve_link')
        assert self.store.writes == 0

    def test_lambda_handler_with_head_request(self) -> None:
        response = app.lambda_handler(make_event('V1StGXR8', method='HEAD'), self.context)

        assert response['statusCode'] == 302

    def test_lambda_handler_is_repeatable(self) -> None:
        responses = [app.lambda_handler(make_event('V1StGXR8'), self.context) for _ in range(3)]

        assert {r['headers']['Location'] for r in responses} == {LONG_URL}
        assert self.store.writes == 0

    def test_lambda_handler_with_unknown_share_id(self) -> None:
        self.assert_not_found(app.lambda_handler(make_event('Zz9_-aB3'), self.context))

    @pytest.mark.parametrize('share_id', ['short_1', 'V1StGXR8x', 'V1St.XR8', '', None])
    def test_lambda_handler_with_malformed_share_id(self, share_id: str | None) -> None:
        self.assert_not_found(app.lambda_handler(make_event(share_id), self.context))

        # Malformed ids never reach the store
        self.load_config.assert_not_called()
        self.dao_factory.assert_not_called()
        assert self.store.reads == 0

    @pytest.mark.parametrize('method', ['POST', 'PUT', 'DELETE'])
    def test_lambda_handler_with_wrong_method(self, method: str) -> None:
        self.assert_not_found(app.lambda_handler(make_event('V1StGXR8', method=method), self.context))
        assert self.store.reads == 0

    def test_lambda_handler_with_configuration_error(self) -> None:
        self.load_config.side_effect = AppConfigError('broken')

        self.assert_not_found(app.lambda_handler(make_event('V1StGXR8'), self.context))

    def test_lambda_handler_with_unreachable_store(self) -> None:
        self.dao_factory.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        self.assert_not_found(app.lambda_handler(make_event('V1StGXR8'), self.context))

    def test_lambda_handler_with_failing_lookup(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(self.store, 'get', MagicMock(side_effect=DataStoreError('Timed out talking to Redis.')))

        self.assert_not_found(app.lambda_handler(make_event('V1StGXR8'), self.context))

    def test_lambda_handler_with_unexpected_error(self) -> None:
        self.load_config.side_effect = RuntimeError('Something goes wrong')

        self.assert_not_found(app.lambda_handler(make_event('V1StGXR8'), self.context))
