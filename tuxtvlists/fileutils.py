"""Fetching playlist files from HTTP(S) URLs or local paths."""

from __future__ import annotations

import http.client
import shutil
import urllib.error
import urllib.request
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class DownloadError(Exception):
    """Raised when a file cannot be downloaded from a URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Error when downloading the file from URL -> {url}.\n\n"
            f"The download has returned error:\n{reason}."
        )
        self.url = url
        self.reason = reason


class ProxyMode(IntEnum):
    """Whether downloads go through a manually configured proxy."""

    NONE = 0
    MANUAL = 1


@dataclass
class ProxySettings:
    """Proxy configuration used for downloads."""

    mode: ProxyMode = ProxyMode.NONE
    server: str = ""
    port: str = ""
    type: str = ""
    use_auth: bool = False
    username: str = ""
    password: str = ""

    def to_string(self, protocol: bool, server: bool, auth: bool) -> str | None:
        """Build a proxy string from the selected parts, or None if none is selected."""
        prefix = f"{self.type}://" if protocol else ""
        host = f"{self.server}:{self.port}" if server else ""
        credentials = f"{self.username}:{self.password}" if auth else ""
        if not (protocol or server or auth):
            return None
        if server and auth:
            return f"{prefix}{credentials}@{host}"
        return f"{prefix}{credentials}{host}"


_NETWORK_ERRORS = (urllib.error.URLError, TimeoutError, ConnectionError, http.client.HTTPException)


def get_file(
    url: str,
    dst_file: str | Path,
    proxy: ProxySettings | None = None,
    timeout: int = 0,
) -> None:
    """Copy the file at url into dst_file, downloading it for http and https URLs."""
    scheme = url.split("//", 1)[0]
    if scheme.lower() in ("http:", "https:"):
        _download(url, Path(dst_file), proxy, timeout)
    else:
        shutil.copyfile(url, dst_file)


def _download(url: str, dst_file: Path, proxy: ProxySettings | None, timeout: int) -> None:
    handlers = []
    if proxy is not None and proxy.mode is ProxyMode.MANUAL:
        spec = proxy.to_string(False, True, proxy.use_auth)
        handlers.append(urllib.request.ProxyHandler({"http": spec, "https": spec}))
    opener = urllib.request.build_opener(*handlers)
    options = {"timeout": timeout} if timeout > 0 else {}

    with dst_file.open("wb") as out:
        try:
            with opener.open(url, **options) as response:
                shutil.copyfileobj(response, out)
        except urllib.error.HTTPError as exc:
            # The server answered: its body is kept like any other content.
            if exc.fp is not None:
                shutil.copyfileobj(exc, out)
        except _NETWORK_ERRORS as exc:
            reason = getattr(exc, "reason", None) or str(exc)
            raise DownloadError(url, str(reason)) from exc