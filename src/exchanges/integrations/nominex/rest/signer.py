"""
Nominex request signing.

Turns an endpoint template and a flat parameter bag into a transport-ready
SignedRequest. Private requests are signed with HMAC-SHA384 over:

    "/api" + private_path + "/" + path + nonce + body

where ``body`` is the compact JSON request body, left out for GET and DELETE.
The upper-cased hex digest goes to the ``nominex-signature`` header.

Parameter bag conventions:
- ``{name}`` placeholders in the path are filled from the bag and the keys removed
- ``urlParams`` holds query string parameters
- everything else is the JSON body (methods with a body only)
"""

import hashlib
import hmac
import re
from typing import Any, Callable, Dict, Optional, Tuple, Union
from urllib.parse import urlencode

import msgspec

from config.structs import ExchangeConfig
from exchanges.structs.enums import ExchangeEnum
from infrastructure.exceptions.exchange import ArgumentsRequiredError, AuthenticationMissingError
from infrastructure.logging import HFTLoggerInterface, get_exchange_logger
from infrastructure.networking.http.nonce import MillisecondNonce
from infrastructure.networking.http.structs import HTTPMethod, SignedRequest

URL_PARAMS_KEY = 'urlParams'
CONTENT_TYPE = 'application/json; charset=UTF-8'
SIGNATURE_PREFIX = '/api'

HEADER_NONCE = 'nominex-nonce'
HEADER_API_KEY = 'nominex-apikey'
HEADER_SIGNATURE = 'nominex-signature'

_PLACEHOLDER_PATTERN = re.compile(r'\{([^}]+)\}')


def implode_path(path: str, params: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Substitute ``{name}`` placeholders and return the path with the unused params.

    Values are inserted verbatim: pair names keep their slash ("BTC/USDT").

    Raises:
        ArgumentsRequiredError: If a placeholder has no value in params
    """
    names = _PLACEHOLDER_PATTERN.findall(path)
    missing = [name for name in names if params.get(name) is None]
    if missing:
        raise ArgumentsRequiredError(f"nominex {path} requires {', '.join(missing)}")

    imploded = _PLACEHOLDER_PATTERN.sub(lambda m: str(params[m.group(1)]), path)
    rest = {key: value for key, value in params.items() if key not in names}
    return imploded, rest


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return value


def encode_query(url_params: Optional[Dict[str, Any]]) -> str:
    """URL-encode query parameters, booleans as ``true``/``false``, None values dropped."""
    if not url_params:
        return ''
    return urlencode([(key, _query_value(value)) for key, value in url_params.items() if value is not None])


class NominexRequestSigner:
    """
    Builds signed Nominex requests.

    Stateless apart from the nonce source, so one signer can serve
    concurrent requests.
    """

    def __init__(self, config: ExchangeConfig,
                 nonce: Optional[Callable[[], int]] = None,
                 logger: Optional[HFTLoggerInterface] = None):
        self.config = config
        self.nonce = nonce or MillisecondNonce()
        self.logger = logger or get_exchange_logger(ExchangeEnum.NOMINEX.value, 'rest.signer')

        self._urls = config.api_urls

    def sign(self, path: str, api: str = 'public',
             method: Union[HTTPMethod, str] = HTTPMethod.GET,
             params: Optional[Dict[str, Any]] = None) -> SignedRequest:
        """
        Build the request for ``path`` on the ``public`` or ``private`` API.

        Args:
            path: Endpoint template relative to the API base, e.g. ``orders/{id}``
            api: ``public`` or ``private``
            method: HTTP method
            params: Parameter bag (placeholders, ``urlParams`` and body fields)

        Returns:
            SignedRequest ready for the transport

        Raises:
            AuthenticationMissingError: Private request without api key or secret
            ArgumentsRequiredError: Path placeholder without a value
        """
        method = HTTPMethod(method) if isinstance(method, str) else method
        if api not in self._urls:
            raise ValueError(f"Unknown Nominex API: {api}")

        request_path, query = implode_path(path, dict(params or {}))
        request_path = '/' + request_path

        url = self._urls[api] + request_path
        query_string = encode_query(query.pop(URL_PARAMS_KEY, None))
        if query_string:
            url += '?' + query_string

        body = msgspec.json.encode(query).decode() if method.has_body else None

        if api != 'private':
            return SignedRequest(url=url, method=method, body=body)

        credentials = self.config.credentials
        if not credentials.api_key or not credentials.secret_key:
            raise AuthenticationMissingError(
                f"nominex {method.value} {request_path} requires api_key and secret_key")

        nonce = str(self.nonce())
        payload = SIGNATURE_PREFIX + self.config.private_path + request_path + nonce + (body or '')
        signature = self.sign_payload(payload, credentials.secret_key)

        self.logger.debug("Signed Nominex request",
                          method=method.value,
                          path=request_path,
                          nonce=nonce)

        headers = {
            'Content-Type': CONTENT_TYPE,
            HEADER_NONCE: nonce,
            HEADER_API_KEY: credentials.api_key,
            HEADER_SIGNATURE: signature,
        }
        return SignedRequest(url=url, method=method, headers=headers, body=body)

    @staticmethod
    def sign_payload(payload: str, secret: str) -> str:
        """Upper-cased hex HMAC-SHA384 of ``payload``."""
        return hmac.new(
            secret.encode('utf-8'),
            payload.encode('utf-8'),
            hashlib.sha384
        ).hexdigest().upper()
