"""Resolve input locations, downloading http(s) sources into the work directory."""

import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

USER_AGENT = "agriseq-merger/0.1.0"
DOWNLOAD_CHUNK = 1 << 16


def is_url(source: Union[str, Path]) -> bool:
    return urlparse(str(source)).scheme in ("http", "https")


class SourceResolver:
    """Turn a path-or-URL into a local path.

    Local paths are returned unchanged (existence is checked later by the
    readers). A URL that cannot be downloaded resolves to ``None`` and is
    treated as a missing input.
    """

    def __init__(
        self,
        download_dir: Union[str, Path],
        session: Optional[requests.Session] = None,
    ):
        self.download_dir = Path(download_dir)
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})

    def resolve(self, source: Union[str, Path]) -> Optional[Path]:
        if not is_url(source):
            return Path(source)

        url = str(source)
        name = os.path.basename(urlparse(url).path) or "download"
        dest = self.download_dir / name
        logger.info("Downloading %s -> %s", url, dest)
        try:
            self.download_dir.mkdir(parents=True, exist_ok=True)
            with self._get_with_retry(url) as resp, open(dest, "wb") as fh:
                for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK):
                    fh.write(chunk)
        except (requests.RequestException, OSError):
            logger.warning("Download failed: %s", url, exc_info=True)
            return None
        return dest

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _get_with_retry(self, url: str) -> requests.Response:
        resp = self._session.get(url, stream=True, timeout=60)
        if resp.status_code == 429:
            raise requests.ConnectionError("Rate limited (429)")
        resp.raise_for_status()
        return resp
