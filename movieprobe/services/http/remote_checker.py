# movieprobe/services/http/remote_checker.py
from __future__ import annotations

from typing import Optional

import httpx

from movieprobe.common.logging import get_logger
from movieprobe.common.settings import get_settings
from movieprobe.domain.dataclasses.probe import RemoteHead
from movieprobe.domain.errors import ResourceNotFound, TooManyRedirects
from movieprobe.domain.ports.probe import RemoteCheckPort

logger = get_logger()


class RemoteResourceChecker(RemoteCheckPort):
    """
    Existence/size check for http(s) resources.

    Redirects are followed by hand so the hop bound is ours: up to
    `max_redirects` hops are allowed, one more raises TooManyRedirects.
    Transport failures (refused, dropped, unparsable or non-http Location)
    yield None instead of raising; a timeout raises ResourceNotFound.
    The response body is never read.
    """

    def __init__(
        self,
        max_redirects: Optional[int] = None,
        timeout_sec: Optional[float] = None,
        method: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        cfg = get_settings().http
        self.max_redirects = cfg.max_redirect_attempts if max_redirects is None else int(max_redirects)
        self.timeout_sec = timeout_sec or cfg.timeout_sec
        self.method = (method or cfg.method).upper()
        self.user_agent = cfg.user_agent
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            follow_redirects=False,
            timeout=self.timeout_sec,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def head(self, url: str) -> Optional[RemoteHead]:
        remaining = self.max_redirects
        try:
            location = httpx.URL(url)
            with self._client() as client:
                while True:
                    request = client.build_request(self.method, location)
                    response = client.send(request, stream=True)
                    try:
                        if not response.has_redirect_location:
                            return RemoteHead(
                                url=str(location),
                                status_code=response.status_code,
                                content_length=_content_length(response),
                            )
                        if remaining == 0:
                            raise TooManyRedirects(url, self.max_redirects)
                        remaining -= 1
                        location = location.join(response.headers["location"])
                        logger.debug("redirect %s -> %s", request.url, location)
                    finally:
                        response.close()
        except httpx.TimeoutException as e:
            raise ResourceNotFound(url, f"timed out after {self.timeout_sec}s checking the URL") from e
        except (httpx.TransportError, httpx.InvalidURL) as e:
            logger.warning("remote check failed for %s: %s", url, e)
            return None


def _content_length(response: httpx.Response) -> Optional[int]:
    raw = response.headers.get("content-length")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None
