"""
PWAcommerce Backend - WooCommerce REST API Client
===================================================

What:  Async HTTP client bound to one store's base URL and REST credentials.
How:   httpx.AsyncClient underneath; generic verb methods against resource
       paths such as "products" or "products/12/reviews".
Who:   Created per request by routes/dependencies.get_commerce_client and
       handed to CatalogService.

URL layout:
    wp_api=True   {base_url}/wp-json/{version}/{endpoint}    (wc/v1, wc/v2, ...)
    wp_api=False  {base_url}/wc-api/{version}/{endpoint}     (legacy v3 API)

Authentication (what the store accepts):
    HTTPS  HTTP Basic auth with key/secret, or consumer_key/consumer_secret
           query parameters when query_string_auth is set (some hosts strip
           the Authorization header).
    HTTP   One-legged OAuth 1.0a, HMAC-SHA256, signing key "secret&".

Failure semantics:
    Transport errors, non-2xx responses (httpx.HTTPStatusError) and bodies
    that are not JSON are raised to the caller unchanged. There is no retry
    and no timeout override; the httpx default timeout applies.
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx
from oauthlib import oauth1

from pwacommerce import __version__

logger = logging.getLogger(__name__)


def _stringify(value: Any) -> str:
    """Query values as the store expects them (booleans lower-case)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CommerceClient:
    """
    Thin async wrapper over the store's REST API.

    Usage:
        async with CommerceClient(url, key, secret) as client:
            products = await client.get("products", {"per_page": 10})
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        *,
        version: str = "wc/v2",
        wp_api: bool = True,
        verify_ssl: bool = True,
        query_string_auth: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.version = version
        self.wp_api = wp_api
        self.query_string_auth = query_string_auth
        self._http = httpx.AsyncClient(
            verify=verify_ssl,
            transport=transport,
            headers={
                "User-Agent": f"PWAcommerce/{__version__}",
                "Accept": "application/json",
            },
        )

    @property
    def is_ssl(self) -> bool:
        return self.base_url.lower().startswith("https://")

    def build_url(self, endpoint: str) -> str:
        api_root = "wp-json" if self.wp_api else "wc-api"
        return f"{self.base_url}/{api_root}/{self.version}/{endpoint.lstrip('/')}"

    def _oauth_url(self, method: str, url: str, params: Dict[str, str]) -> str:
        """URL with params and a one-legged OAuth 1.0a signature in the query."""
        signer = oauth1.Client(
            self.consumer_key,
            client_secret=self.consumer_secret,
            signature_method=oauth1.SIGNATURE_HMAC_SHA256,
            signature_type=oauth1.SIGNATURE_TYPE_QUERY,
        )
        signed_url, _, _ = signer.sign(str(httpx.URL(url, params=params)), http_method=method.upper())
        return signed_url

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
    ) -> Any:
        """
        Issue one request and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: the store answered with a non-2xx status
            httpx.HTTPError: connection, TLS or timeout failure
            ValueError: the body is not JSON
        """
        url = self.build_url(endpoint)
        query = {k: _stringify(v) for k, v in (params or {}).items()}
        auth = None

        if self.is_ssl:
            if self.query_string_auth:
                query.update(
                    consumer_key=self.consumer_key,
                    consumer_secret=self.consumer_secret,
                )
            else:
                auth = (self.consumer_key, self.consumer_secret)
        else:
            # Signed URL goes out as is; merging params would re-encode its query
            url, query = self._oauth_url(method, url, query), {}

        start_time = time.perf_counter()
        response = await self._http.request(
            method.upper(),
            url,
            params=query or None,
            json=data,
            auth=auth,
        )
        logger.debug(
            "%s %s -> %d in %.0fms",
            method.upper(),
            endpoint,
            response.status_code,
            (time.perf_counter() - start_time) * 1000,
        )

        response.raise_for_status()
        return response.json()

    async def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", endpoint, params=params, data=data)

    async def put(self, endpoint: str, data: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", endpoint, params=params, data=data)

    async def delete(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("DELETE", endpoint, params=params)

    async def options(self, endpoint: str) -> Any:
        return await self.request("OPTIONS", endpoint)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CommerceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
