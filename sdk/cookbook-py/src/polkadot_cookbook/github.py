from __future__ import annotations

import http.client
import json
import os
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable

from .error_codes import COOKBOOK_E_FETCH_FAILED
from .errors import FetchError


API_BASE = "https://api.github.com"
RAW_BASE = "https://raw.githubusercontent.com"
DOCS_REPO = "polkadot-developers/polkadot-docs"
DEFAULT_BRANCH = "master"
USER_AGENT = "polkadot-cookbook-tools"


def token_from_env() -> str | None:
    for name in ("GITHUB_TOKEN", "GH_TOKEN"):
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def raw_url(repo: str, path: str, *, ref: str = DEFAULT_BRANCH) -> str:
    return f"{RAW_BASE}/{repo}/{ref}/{path.lstrip('/')}"


def compare_url(repo: str, old: str, new: str) -> str:
    return f"https://github.com/{repo}/compare/{old}...{new}"


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        *,
        api_base: str = API_BASE,
        timeout_s: float = 30.0,
        urlopen_fn: Callable[..., Any] = urllib.request.urlopen,
    ):
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._timeout_s = timeout_s
        self._urlopen = urlopen_fn

    @classmethod
    def from_env(cls, **kwargs: Any) -> "GitHubClient":
        return cls(token_from_env(), **kwargs)

    def _headers(self, *, api: bool) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if api:
            headers["Accept"] = "application/vnd.github+json"
            headers["X-GitHub-Api-Version"] = "2022-11-28"
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get(self, url: str, *, api: bool) -> bytes:
        req = urllib.request.Request(url, headers=self._headers(api=api))
        try:
            with self._urlopen(req, timeout=self._timeout_s) as response:
                return response.read()
        except urllib.error.HTTPError as exc:
            raise FetchError(
                COOKBOOK_E_FETCH_FAILED,
                f"GET {url}: HTTP {exc.code}",
                data={"url": url, "reason": f"HTTP {exc.code}", "status": exc.code},
            ) from exc
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            raise FetchError(
                COOKBOOK_E_FETCH_FAILED,
                f"GET {url}: {exc}",
                data={"url": url, "reason": str(exc)},
            ) from exc

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}/{path.lstrip('/')}"
        if params:
            url += "?" + urllib.parse.urlencode(params)
        body = self._get(url, api=True)
        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FetchError(
                COOKBOOK_E_FETCH_FAILED,
                f"GET {url}: response is not JSON",
                data={"url": url, "reason": str(exc)},
            ) from exc

    def latest_commit(self, repo: str, path: str, *, branch: str = DEFAULT_BRANCH) -> str | None:
        """SHA of the most recent commit touching ``path`` on ``branch``, or None if there is none."""
        payload = self.get_json(
            f"repos/{repo}/commits",
            {"path": path, "per_page": 1, "sha": branch},
        )
        if not isinstance(payload, list) or not payload:
            return None
        first = payload[0]
        if not isinstance(first, dict):
            return None
        sha = first.get("sha")
        if not isinstance(sha, str) or not sha:
            return None
        return sha

    def fetch_text(self, url: str) -> str:
        body = self._get(url, api=False)
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(
                COOKBOOK_E_FETCH_FAILED,
                f"GET {url}: response is not UTF-8",
                data={"url": url, "reason": str(exc)},
            ) from exc
