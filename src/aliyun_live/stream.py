"""Live streams and signed publish/playback URLs."""

import hashlib
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .util import unix_timestamp, utc_now

if TYPE_CHECKING:
    from .live import Live


# rand and uid components of the auth key; unused by this client
AUTH_KEY_RAND = "0"
AUTH_KEY_UID = "0"


class StreamCredentials(BaseModel):
    """Private key and validity window for signing stream URLs."""

    model_config = ConfigDict(frozen=True)

    private_key: str = Field(repr=False)
    timeout: timedelta = timedelta(minutes=30)

    def clone(self) -> "StreamCredentials":
        return self.model_copy()

    def auth_key(self, uri: str, expires_at: datetime | None = None) -> str:
        """
        Compute the ``auth_key`` query value for a URL path.

        Args:
            uri: The URL path, e.g. ``/app/stream.m3u8``.
            expires_at: Expiry time; defaults to now plus ``timeout``.

        Returns:
            ``<timestamp>-<rand>-<uid>-<md5>`` where the md5 covers
            ``<uri>-<timestamp>-<rand>-<uid>-<private_key>``.
        """
        if expires_at is None:
            expires_at = utc_now() + self.timeout
        timestamp = unix_timestamp(expires_at)
        prefix = f"{timestamp}-{AUTH_KEY_RAND}-{AUTH_KEY_UID}"
        digest = hashlib.md5(f"{uri}-{prefix}-{self.private_key}".encode("utf-8")).hexdigest()
        return f"{prefix}-{digest}"


class Stream:
    """
    A stream under a domain and application.

    Only computes URLs and forwards stream operations to the controller that
    created it. Signing is on when credentials are present.
    """

    def __init__(
        self,
        domain_name: str,
        app_name: str,
        stream_name: str,
        video_center: str,
        stream_credentials: StreamCredentials | None = None,
        live: "Live | None" = None,
    ):
        self.domain_name = domain_name
        self.app_name = app_name
        self.stream_name = stream_name
        self.video_center = video_center
        self.stream_credentials = stream_credentials
        self.live = live

    @property
    def sign_on(self) -> bool:
        return self.stream_credentials is not None

    def _path(self, suffix: str = "") -> str:
        return f"/{self.app_name}/{self.stream_name}{suffix}"

    def _signed(self, url: str, uri: str, expires_at: datetime | None) -> str:
        if not self.sign_on:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}auth_key={self.stream_credentials.auth_key(uri, expires_at)}"

    def rtmp_publish_url(self, expires_at: datetime | None = None) -> str:
        """Publish URL: ``rtmp://<video_center>/<app>/<stream>?vhost=<domain>``."""
        path = self._path()
        url = f"rtmp://{self.video_center}{path}?vhost={self.domain_name}"
        return self._signed(url, path, expires_at)

    def rtmp_live_url(self, expires_at: datetime | None = None) -> str:
        path = self._path()
        return self._signed(f"rtmp://{self.domain_name}{path}", path, expires_at)

    def hls_live_url(self, expires_at: datetime | None = None) -> str:
        path = self._path(".m3u8")
        return self._signed(f"http://{self.domain_name}{path}", path, expires_at)

    def http_flv_live_url(self, expires_at: datetime | None = None) -> str:
        path = self._path(".flv")
        return self._signed(f"http://{self.domain_name}{path}", path, expires_at)

    def _require_live(self) -> "Live":
        if self.live is None:
            raise RuntimeError(f"Stream {self.stream_name} is not bound to a Live controller")
        return self.live

    def is_online(self) -> bool:
        """Check whether the stream is in the online list of its domain."""
        resp = self._require_live().streams_online_list()
        return any(
            info.stream_name == self.stream_name and info.app_name == self.app_name
            for info in resp.online_info
        )

    def is_blocked(self) -> bool:
        """Check whether the stream is on the domain's blacklist."""
        resp = self._require_live().streams_block_list()
        target = f"{self.domain_name}{self._path()}"
        return target in resp.stream_urls

    def forbid_push(self, resume_time: datetime | None = None):
        """Blacklist the stream's publisher, optionally until ``resume_time``."""
        return self._require_live().forbid_live_stream(
            self.app_name, self.stream_name, "publisher", resume_time
        )

    def resume_push(self):
        return self._require_live().resume_live_stream(
            self.app_name, self.stream_name, "publisher"
        )

    def __repr__(self) -> str:
        return (
            f"Stream(domain_name={self.domain_name!r}, app_name={self.app_name!r}, "
            f"stream_name={self.stream_name!r}, sign_on={self.sign_on})"
        )
