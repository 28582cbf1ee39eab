# src/aadusers/core/graph_client.py
from __future__ import annotations
from typing import Callable, Dict, Any
from aadusers.http.client import HttpClient
from aadusers.config.loader import get_http_config, get_graph_config

class GraphClient:
    """
    Tiny Graph wrapper. Token is provided lazily via token_provider().
    Paths are relative to the configured API version, e.g. "/users/{id}".
    """
    def __init__(
        self,
        token_provider: Callable[[], str],
        timeout: float | None = None,
        max_retries: int | None = None,
        logger=None,
        settings: dict | None = None,
        http: HttpClient | None = None,
    ):
        http_cfg = get_http_config(settings)
        graph_cfg = get_graph_config(settings)
        to = float(timeout if timeout is not None else http_cfg.get("timeout_seconds", 30))
        mr = int(max_retries if max_retries is not None else http_cfg.get("max_retries", 4))

        self.api_version = graph_cfg["api_version"]
        self._token_provider = token_provider
        self._http = http or HttpClient(
            base_url=graph_cfg["base_url"], timeout=to, max_retries=mr, logger=logger
        )

    def _auth_headers(self, extra: Dict[str, str] | None = None) -> Dict[str, str]:
        h = {"Authorization": f"Bearer {self._token_provider()}"}
        if extra:
            h.update(extra)
        return h

    def _versioned(self, path_or_url: str) -> str:
        if path_or_url.startswith("http://") or path_or_url.startswith("https://"):
            return path_or_url
        return f"/{self.api_version}/{path_or_url.lstrip('/')}"

    def get_json(self, path_or_url: str, *, params: Dict[str, Any] | None = None) -> dict:
        return self._http.get_json(self._versioned(path_or_url), headers=self._auth_headers(), params=params)
