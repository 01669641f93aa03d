"""GitHub REST API adapter for the paginated issue listing."""

from __future__ import annotations

import base64
import http.client
import json
import os
from typing import Any, Callable, Mapping
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from site_issues.adapters.github_adapter import GitHubAdapterError

BASE_URL = "https://api.github.com"
LOGIN_ENV = "GITHUB_LOGIN"
PASSWORD_ENV = "GITHUB_PASSWORD"

RequestFn = Callable[[str, Mapping[str, str]], tuple[int, dict[str, str], str]]


class GitHubRestAdapter:
    """List repository issues through the REST API.

    Credentials default to the ``GITHUB_LOGIN`` / ``GITHUB_PASSWORD``
    environment variables; without them requests are unauthenticated.
    """

    def __init__(
        self,
        login: str | None = None,
        password: str | None = None,
        *,
        timeout_seconds: float = 15.0,
        base_url: str = BASE_URL,
        request_fn: RequestFn | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self._login = login if login is not None else env.get(LOGIN_ENV)
        self._password = password if password is not None else env.get(PASSWORD_ENV)
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url.rstrip("/")
        self._request_fn = request_fn or self._default_request

    def list_issues(self, project: str, page: int) -> list[dict[str, Any]] | None:
        """Return one page of issues for ``owner/name``.

        ``None`` signals "no result" (HTTP 204 or an empty/null body); HTTP
        errors and malformed payloads raise ``GitHubAdapterError``.
        """
        query = urlencode({"page": page})
        url = f"{self._base_url}/repos/{quote(project, safe='/')}/issues?{query}"
        status, _, body = self._request_fn(url, self._headers())

        if status >= 400:
            raise GitHubAdapterError(
                f"GitHub API request failed with status {status} for {url}: {body[:200]}",
            )
        if status == 204 or not body.strip():
            return None

        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise GitHubAdapterError(f"Invalid JSON from {url}: {exc}") from exc

        if payload is None:
            return None
        if not isinstance(payload, list):
            raise GitHubAdapterError(f"Unexpected payload when listing issues for {project}: {payload!r}")
        return payload

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "site-issues",
        }
        if self._login and self._password:
            credentials = f"{self._login}:{self._password}".encode("utf-8")
            headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode('ascii')}"
        return headers

    def _default_request(self, url: str, headers: Mapping[str, str]) -> tuple[int, dict[str, str], str]:
        request = Request(url=url, headers=dict(headers), method="GET")
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                return response.status, dict(response.headers.items()), response.read().decode("utf-8")
        except HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")
            return exc.code, dict(exc.headers.items()) if exc.headers else {}, body
        except URLError as exc:
            raise GitHubAdapterError(f"GitHub API request to {url} failed: {exc.reason}") from exc
        except (OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            raise GitHubAdapterError(f"GitHub API request to {url} failed: {exc}") from exc
