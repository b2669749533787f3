"""
Tests for Nominex request signing: URL construction, payload layout,
HMAC-SHA384 signature and credential checks.
"""

import hashlib
import hmac
import json
from urllib.parse import parse_qs, urlsplit

import pytest

from config.structs import ExchangeConfig, ExchangeCredentials
from exchanges.integrations.nominex.rest.signer import (
    NominexRequestSigner, encode_query, implode_path
)
from exchanges.structs.types import ExchangeName
from infrastructure.exceptions.exchange import ArgumentsRequiredError, AuthenticationMissingError
from infrastructure.networking.http.nonce import FixedNonce
from infrastructure.networking.http.structs import HTTPMethod

SECRET = "test-secret-key"
NONCE = 1600000000000


def expected_signature(payload: str, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha384).hexdigest().upper()


class TestImplodePath:

    def test_substitutes_and_removes_placeholders(self):
        path, rest = implode_path('orderbook/{symbol}/A0/{limit}',
                                  {'symbol': 'BTC/USDT', 'limit': 25, 'extra': 1})
        assert path == 'orderbook/BTC/USDT/A0/25'
        assert rest == {'extra': 1}

    def test_missing_placeholder_raises(self):
        with pytest.raises(ArgumentsRequiredError):
            implode_path('orders/{id}', {})

    def test_path_without_placeholders(self):
        assert implode_path('orders', {'a': 1}) == ('orders', {'a': 1})


class TestEncodeQuery:

    def test_booleans_are_lowercase(self):
        assert encode_query({'active': True, 'cid': False}) == 'active=true&cid=false'

    def test_empty_and_none(self):
        assert encode_query(None) == ''
        assert encode_query({}) == ''
        assert encode_query({'start': None, 'limit': 5}) == 'limit=5'


class TestNominexRequestSigner:

    @pytest.fixture
    def signer(self, private_config):
        return NominexRequestSigner(private_config, nonce=FixedNonce(NONCE))

    def test_private_post_signature(self, signer):
        params = {'pairName': 'BTC/USDT', 'side': 'BUY', 'amount': '0.5', 'type': 'LIMIT'}
        request = signer.sign('orders', 'private', HTTPMethod.POST, params)

        body = '{"pairName":"BTC/USDT","side":"BUY","amount":"0.5","type":"LIMIT"}'
        payload = f"/api/api/rest/v1/private/orders{NONCE}{body}"

        assert request.url == 'https://nominex.io/api/rest/v1/private/orders'
        assert request.method == HTTPMethod.POST
        assert request.body == body
        assert request.headers == {
            'Content-Type': 'application/json; charset=UTF-8',
            'nominex-nonce': str(NONCE),
            'nominex-apikey': 'test-api-key',
            'nominex-signature': expected_signature(payload),
        }

    def test_signature_is_deterministic_for_same_nonce(self, signer):
        params = {'id': 42, 'amount': '1'}
        first = signer.sign('orders/{id}', 'private', 'PUT', params)
        second = signer.sign('orders/{id}', 'private', 'PUT', dict(params))
        assert first.headers['nominex-signature'] == second.headers['nominex-signature']
        assert first.body == second.body == '{"amount":"1"}'

    @pytest.mark.parametrize("method", [HTTPMethod.GET, HTTPMethod.DELETE])
    def test_get_and_delete_sign_without_body(self, signer, method):
        request = signer.sign('orders/{id}', 'private', method, {'id': 7, 'walletType': 'SPOT'})

        payload = f"/api/api/rest/v1/private/orders/7{NONCE}"
        assert request.body is None
        assert request.headers['nominex-signature'] == expected_signature(payload)

    def test_url_params_go_to_query_not_signature(self, signer):
        request = signer.sign('orders/{symbol}', 'private', HTTPMethod.GET, {
            'symbol': 'BTC/USDT',
            'urlParams': {'active': True, 'limit': 10},
        })
        split = urlsplit(request.url)
        assert split.path == '/api/rest/v1/private/orders/BTC/USDT'
        assert parse_qs(split.query) == {'active': ['true'], 'limit': ['10']}

        payload = f"/api/api/rest/v1/private/orders/BTC/USDT{NONCE}"
        assert request.headers['nominex-signature'] == expected_signature(payload)

    def test_url_params_excluded_from_body(self, signer):
        request = signer.sign('orders/{id}', 'private', HTTPMethod.PUT, {
            'id': 5, 'amount': '2', 'urlParams': {'cid': True},
        })
        assert request.url.endswith('/orders/5?cid=true')
        assert json.loads(request.body) == {'amount': '2'}

    def test_empty_body_for_post_without_params(self, signer):
        request = signer.sign('wallets/{currency}/address', 'private', HTTPMethod.POST, {'currency': 'BTC'})
        assert request.body == '{}'
        payload = f"/api/api/rest/v1/private/wallets/BTC/address{NONCE}{{}}"
        assert request.headers['nominex-signature'] == expected_signature(payload)

    def test_signature_is_uppercase_hex(self, signer):
        signature = signer.sign('wallets', 'private').headers['nominex-signature']
        assert len(signature) == 96
        assert signature == signature.upper()
        int(signature, 16)

    def test_different_nonces_give_different_signatures(self, private_config):
        nonces = iter([NONCE, NONCE + 1])
        signer = NominexRequestSigner(private_config, nonce=lambda: next(nonces))
        first = signer.sign('wallets', 'private')
        second = signer.sign('wallets', 'private')
        assert first.headers['nominex-nonce'] != second.headers['nominex-nonce']
        assert first.headers['nominex-signature'] != second.headers['nominex-signature']

    def test_public_request_is_not_signed(self, public_config):
        signer = NominexRequestSigner(public_config, nonce=FixedNonce(NONCE))
        request = signer.sign('ticker/{symbol}', 'public', HTTPMethod.GET, {'symbol': 'BTC/USDT'})
        assert request.url == 'https://nominex.io/api/rest/v1/ticker/BTC/USDT'
        assert request.headers is None
        assert request.body is None

    def test_demo_host(self):
        config = ExchangeConfig(name=ExchangeName("nominex"), demo=True)
        request = NominexRequestSigner(config).sign('pairs')
        assert request.url == 'https://demo.nominex.io/api/rest/v1/pairs'

    @pytest.mark.parametrize("credentials", [
        ExchangeCredentials(),
        ExchangeCredentials(api_key="key", secret_key=""),
    ])
    def test_private_without_credentials_raises(self, credentials):
        config = ExchangeConfig(name=ExchangeName("nominex"), credentials=credentials)
        nonce_calls = []
        signer = NominexRequestSigner(config, nonce=lambda: nonce_calls.append(1) or NONCE)

        with pytest.raises(AuthenticationMissingError):
            signer.sign('wallets', 'private')
        assert nonce_calls == []

    def test_default_logger_is_exchange_scoped(self, public_config):
        signer = NominexRequestSigner(public_config)
        assert signer.logger.name == "nominex.rest.signer"

    def test_unknown_api_raises(self, signer):
        with pytest.raises(ValueError):
            signer.sign('pairs', 'internal')
