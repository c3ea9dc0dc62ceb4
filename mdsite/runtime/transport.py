"""Fetch site files for the runtime services from disk or over HTTP.

Transports take site-relative paths (``content/index.json``,
``content/blog/2024-01-01-a.md``) and return text. Missing files raise
:class:`ContentNotFoundError`; any other failure raises
:class:`ContentFetchError`. Timeouts and retries belong to the transport.

Example
-------
>>> import asyncio
>>> from pathlib import Path
>>> from mdsite.runtime.transport import FileSystemTransport
>>> transport = FileSystemTransport(Path("site"))
>>> asyncio.run(transport.fetch_text("content/index.json"))  # doctest: +SKIP
'{"blog": [...]}'
"""

from __future__ import annotations

import abc
import asyncio
import json
import logging
import typing as typ
from http import HTTPStatus
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from mdsite._constants import CONTENT_DIR
from mdsite.scanner import ContentScanner

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex

logger = logging.getLogger(__name__)


class ContentFetchError(RuntimeError):
    """Raised when a site file cannot be fetched."""


class ContentNotFoundError(ContentFetchError):
    """Raised when a site file does not exist."""


class ContentTransport(abc.ABC):
    """Source of site files for the runtime services."""

    @abc.abstractmethod
    async def fetch_text(self, path: str) -> str:
        """Return the text of the site file at ``path``.

        Raises
        ------
        ContentNotFoundError
            If the file does not exist.
        ContentFetchError
            If the file exists but cannot be read.
        """

    async def fetch_json(self, path: str) -> object:
        """Return the decoded JSON document at ``path``.

        Raises
        ------
        ContentFetchError
            If the file cannot be fetched or is not valid JSON.
        """
        text = await self.fetch_text(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"'{path}' is not valid JSON: {exc}"
            raise ContentFetchError(msg) from exc

    async def discover_index(self) -> ContentIndex | None:
        """Return a content index built without ``content/index.json``, if possible.

        Transports that cannot list files return ``None``.
        """
        return None


class FileSystemTransport(ContentTransport):
    """Read site files below a local directory."""

    def __init__(
        self,
        root: Path,
        *,
        scan_when_unindexed: bool = True,
        site_config_path: Path | None = None,
    ) -> None:
        """Create a transport rooted at ``root``.

        Parameters
        ----------
        root : Path
            Site root holding the ``content/`` directory.
        scan_when_unindexed : bool, optional
            Scan ``content/`` when no ``index.json`` has been generated.
        site_config_path : Path, optional
            Site configuration used by that scan.
        """
        self.root = Path(root)
        self.scan_when_unindexed = scan_when_unindexed
        self.site_config_path = site_config_path

    async def fetch_text(self, path: str) -> str:
        """Read ``root/path`` in a worker thread."""
        target = self._resolve(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            msg = f"'{path}' not found under {self.root}"
            raise ContentNotFoundError(msg) from exc
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Failed to read '{path}': {exc}"
            raise ContentFetchError(msg) from exc

    async def discover_index(self) -> ContentIndex | None:
        """Scan the content directory when allowed."""
        if not self.scan_when_unindexed:
            return None
        scanner = ContentScanner(self.root / CONTENT_DIR, self.site_config_path)
        try:
            return await asyncio.to_thread(scanner.scan)
        except OSError as exc:
            logger.warning("Content scan of %s failed: %s", scanner.content_path, exc)
            return None

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path.lstrip("/")).resolve()
        if not target.is_relative_to(root):
            msg = f"'{path}' resolves outside {self.root}"
            raise ContentNotFoundError(msg)
        return target


class HttpTransport(ContentTransport):
    """Fetch site files from a web server with retrying GET requests."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Create a transport for the site published at ``base_url``.

        Parameters
        ----------
        base_url : str
            Site root URL; paths are appended after a ``/``.
        session : requests.Session, optional
            Preconfigured session. Defaults to a session retrying transient
            5xx responses and connection errors.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or self._build_session()

    @staticmethod
    def _build_session() -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=5,
            read=5,
            connect=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=("GET", "HEAD"),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def url_for(self, path: str) -> str:
        """Return the absolute URL for a site-relative ``path``."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch_text(self, path: str) -> str:
        """GET ``path`` in a worker thread."""
        return await asyncio.to_thread(self._get, path)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def _get(self, path: str) -> str:
        url = self.url_for(path)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to fetch '{url}': {exc}"
            raise ContentFetchError(msg) from exc
        if response.status_code == HTTPStatus.NOT_FOUND:
            msg = f"'{url}' not found"
            raise ContentNotFoundError(msg)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            msg = f"Fetching '{url}' failed with status {response.status_code}"
            raise ContentFetchError(msg)
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response.text


__all__ = [
    "ContentFetchError",
    "ContentNotFoundError",
    "ContentTransport",
    "FileSystemTransport",
    "HttpTransport",
]
