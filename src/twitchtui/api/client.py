from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from twitchtui.errors import TransportError

logger = logging.getLogger(__name__)


class GqlClient:
    GQL_URL = "https://gql.twitch.tv/gql"
    USHER_VOD_URL = "https://usher.ttvnw.net/vod/{vod_id}.m3u8?sig={signature}&token={token}"

    def __init__(
        self,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)
        self.timeout = timeout

        self.last_status: Optional[int] = None

    @classmethod
    def from_settings(cls, settings) -> "GqlClient":
        return cls(headers=settings.headers(), timeout=settings.request_timeout)

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        self.last_status = r.status_code
        if not r.ok:
            raise TransportError(f"{method} {url} returned HTTP {r.status_code}")
        return r

    def query(self, body: Dict[str, Any]) -> bytes:
        """Send one persisted query and return the raw response bytes."""
        logger.debug("POST %s %s", self.GQL_URL, body.get("operationName"))
        r = self._request("POST", self.GQL_URL, json=body)
        logger.debug("%s: %d bytes", body.get("operationName"), len(r.content))
        return r.content

    def query_batch(self, bodies: List[Dict[str, Any]]) -> bytes:
        """Send several queries in one request, the response is a JSON list."""
        logger.debug("POST %s batch of %d", self.GQL_URL, len(bodies))
        r = self._request("POST", self.GQL_URL, json=bodies)
        return r.content

    def vod_manifest(self, vod_id: str, *, signature: str, token: str) -> str:
        url = self.USHER_VOD_URL.format(vod_id=vod_id, signature=signature, token=token)
        logger.debug("GET vod manifest for %s", vod_id)
        r = self._request("GET", url)
        return r.text
