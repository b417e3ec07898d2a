#!/usr/bin/env python3
# chan_tui/net.py
"""
HTTP access to the image-board API.

One ApiClient owns one requests.Session (with urllib3 Retry mounted) and is
handed to whatever needs network access; nothing here is module-global.
Every fetch is blocking. Failures raise FetchError.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from email.utils import format_datetime
from typing import Any, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from chan_tui.models import BoardsResponse, Post, Thread

log = logging.getLogger(__name__)

__all__ = ["ApiClient", "FetchError"]


class FetchError(Exception):
    """A request failed, returned an error status or an unusable body."""


class ApiClient:
    """
    Blocking client for boards, catalogs, threads and thumbnails.
    Safe to share between threads; requests.Session pools connections.
    """

    def __init__(
        self,
        api_base: str = "https://a.4cdn.org",
        image_base: str = "https://i.4cdn.org",
        user_agent: str = "chan-tui",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        retries: int = 3,
        pool_size: int = 8,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.image_base = image_base.rstrip("/")
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)

        # HTTP session with retry
        if session is None:
            session = requests.Session()
            retry = Retry(
                total=retries,
                connect=retries,
                read=retries,
                backoff_factor=0.3,
                status_forcelist=(429, 500, 502, 503, 504),
                allowed_methods=False,
            )
            adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        session.headers["User-Agent"] = user_agent
        self.session = session

    @classmethod
    def from_config(cls, cfg) -> "ApiClient":
        n = cfg["network"]
        return cls(
            api_base=n["api_base"],
            image_base=n["image_base"],
            user_agent=n["user_agent"],
            connect_timeout=float(n["connect_timeout_s"]),
            read_timeout=float(n["read_timeout_s"]),
            retries=int(n["retries"]),
            pool_size=int(n["pool_size"]),
        )

    # -------------
    # URL helpers
    # -------------

    def thumbnail_url(self, board: str, tim: int) -> str:
        return f"{self.image_base}/{board}/{tim}s.jpg"

    def _api_url(self, path: str) -> str:
        return f"{self.api_base}/{path.lstrip('/')}"

    # -------------
    # Fetch logic
    # -------------

    def _get(self, url: str, headers: Optional[dict] = None) -> requests.Response:
        t0 = time.perf_counter()
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Error during {url} request: {exc}") from exc
        log.info("Took %.4f seconds to get %s (%s)", time.perf_counter() - t0, url, resp.status_code)
        return resp

    def _get_json(self, url: str) -> Any:
        resp = self._get(url)
        if resp.status_code != 200:
            raise FetchError(f"{url} returned HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as exc:
            raise FetchError(f"Failed to parse {url}: {exc}") from exc

    def get_bytes(self, url: str) -> bytes:
        resp = self._get(url)
        if resp.status_code != 200:
            raise FetchError(f"{url} returned HTTP {resp.status_code}")
        return resp.content

    def get_thumbnail(self, board: str, tim: int) -> bytes:
        return self.get_bytes(self.thumbnail_url(board, tim))

    def load_boards(self) -> BoardsResponse:
        data = self._get_json(self._api_url("boards.json"))
        try:
            return BoardsResponse.from_json(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Failed to parse boards list: {exc}") from exc

    def get_threads_for_board(self, board: str) -> List[Post]:
        """Thread starters on the first catalog page of a board."""
        pages = self._get_json(self._api_url(f"{board}/catalog.json"))
        try:
            if not pages:
                return []
            return [Post.from_json(p) for p in pages[0].get("threads", [])]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Failed to parse /{board}/ catalog: {exc}") from exc

    def get_thread(self, board: str, thread_id: str, since: Optional[datetime] = None) -> Optional[Thread]:
        """
        Fetch a whole thread. With since, sends If-Modified-Since and returns
        None when the server reports no change or sends an empty body.
        """
        headers = {}
        if since is not None:
            headers["If-Modified-Since"] = format_datetime(since, usegmt=True)
        resp = self._get(self._api_url(f"{board}/thread/{thread_id}.json"), headers=headers)
        if resp.status_code == 304:
            return None
        if resp.status_code != 200:
            raise FetchError(f"/{board}/thread/{thread_id} returned HTTP {resp.status_code}")
        try:
            return Thread.from_json(resp.json())
        except (KeyError, TypeError, ValueError):
            log.info("Failed to parse /%s/thread/%s - assuming empty response body", board, thread_id)
            return None
