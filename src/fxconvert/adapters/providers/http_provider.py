# src/fxconvert/adapters/providers/http_provider.py
"""
HTTP Rate Provider - Single GET against a rate API

This module implements the HTTP client shared by both upstream APIs
(Exchange Rates API and Open Exchange Rates). Each call issues exactly one
GET request; there is no retry, no backoff and no local caching here (the
Rate Store owns caching). Every failure is mapped to a distinct NetworkError
subclass so the converter can decide whether cached data masks it.

Files that USE this module:
- fxconvert.adapters.providers.factory (builds HttpRateProvider instances)
- tests.test_providers (unit tests)

Files that this module USES:
- fxconvert.adapters.providers.base (ProviderKind, RateProvider)
- fxconvert.adapters.providers.decoding (snapshot_from_payload)
- fxconvert.domain.errors (NetworkError subclasses)
"""
import logging
import urllib.parse
from typing import Optional

import requests

from fxconvert.adapters.providers.base import ProviderKind, RateProvider
from fxconvert.adapters.providers.decoding import snapshot_from_payload
from fxconvert.domain.errors import (
    InvalidDataError,
    InvalidResponseError,
    InvalidURLError,
    NoDataError,
    TransportError,
)
from fxconvert.domain.models import RateSnapshot

log = logging.getLogger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# Query parameter carrying the key, per provider
_KEY_PARAMS = {
    ProviderKind.EXCHANGE_RATES_API: "api_key",
    ProviderKind.OPEN_EXCHANGE_RATES: "app_id",
}


class HttpRateProvider(RateProvider):
    """
    Fetches the latest rates from one of the configured REST endpoints.

    The expected body is a flat JSON object:
      {"base": "USD", "rates": {"EUR": 0.85, ...}, "timestamp": 1641234567}
    """

    def __init__(self, kind: ProviderKind, api_key: str, timeout: Optional[int] = 10,
                 base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        """
        Initialize HTTP rate provider.

        Args:
            kind: Which upstream API this provider talks to
            api_key: API key inserted into the endpoint URL
            timeout: HTTP timeout in seconds (None keeps the library default)
            base_url: Optional full endpoint URL overriding the provider's default
            session: Optional requests.Session (plain requests.get when omitted)
        """
        self.kind = kind
        self.url = base_url or kind.latest_endpoint_url(api_key)
        self.timeout = timeout
        self.session = session

    def _validate_url(self) -> None:
        """
        Check the endpoint URL before any request is made.

        Raises:
            InvalidURLError: If scheme/host are missing or the key parameter is empty
        """
        parsed = urllib.parse.urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURLError(f"Invalid URL for {self.kind.display_name}: {self.url!r}")
        key_param = _KEY_PARAMS[self.kind]
        params = urllib.parse.parse_qs(parsed.query)
        if key_param in parsed.query and not params.get(key_param, [""])[0]:
            raise InvalidURLError(f"{self.kind.display_name} URL contains empty {key_param} value")

    def fetch(self) -> RateSnapshot:
        """
        Fetch and decode the latest rate table.

        Returns:
            RateSnapshot stamped with the local fetch time

        Raises:
            InvalidURLError: Malformed endpoint URL
            TransportError: Connection failure, timeout or other transport error
            InvalidResponseError: Non-2xx status or non-JSON content type
            NoDataError: Empty response body
            InvalidDataError: Body is not decodable JSON of the expected shape
        """
        self._validate_url()
        get = self.session.get if self.session is not None else requests.get

        try:
            log.info("Fetching latest rates from %s", self.kind.display_name)
            resp = get(self.url, headers=JSON_HEADERS, timeout=self.timeout)
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            log.error("%s URL rejected: %s", self.kind.display_name, e)
            raise InvalidURLError(str(e)) from e
        except requests.exceptions.RequestException as e:
            log.warning("%s request failed (network/connection error): %s", self.kind.display_name, e)
            raise TransportError(e) from e

        log.debug("%s response status code: %d", self.kind.display_name, resp.status_code)
        if not 200 <= resp.status_code < 300:
            log.error("%s returned HTTP %d", self.kind.display_name, resp.status_code)
            raise InvalidResponseError(
                f"{self.kind.display_name} returned HTTP {resp.status_code}"
            )

        content_type = resp.headers.get("Content-Type", "")
        if content_type and "json" not in content_type.lower():
            log.error("%s returned unexpected content type: %s", self.kind.display_name, content_type)
            raise InvalidResponseError(
                f"{self.kind.display_name} returned non-JSON content ({content_type})"
            )

        if not resp.content:
            log.error("%s returned an empty body", self.kind.display_name)
            raise NoDataError()

        try:
            payload = resp.json()
        except ValueError as e:
            log.error("%s returned invalid JSON: %s", self.kind.display_name, e)
            raise InvalidDataError() from e

        snapshot = snapshot_from_payload(payload, default_base=self.kind.base_currency)
        log.info(
            "%s updated: base=%s, %d rates",
            self.kind.display_name, snapshot.base_currency, len(snapshot.rates),
        )
        return snapshot
