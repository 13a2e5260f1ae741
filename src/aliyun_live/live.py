"""Live API controller."""

import logging
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict

from .client import Client
from .config import DEFAULT_VIDEO_CENTER, Config
from .credentials import Credentials
from .errors import InvalidArgumentError
from .models import (
    BlockListResponse,
    ControlHistoryResponse,
    OnlineListResponse,
    PublishListResponse,
)
from .request import (
    DescribeLiveStreamsBlockListAction,
    DescribeLiveStreamsControlHistoryAction,
    DescribeLiveStreamsOnlineListAction,
    DescribeLiveStreamsPublishListAction,
    ForbidLiveStreamAction,
    LiveRequest,
    ResumeLiveStreamAction,
    new_live_request,
)
from .response import Response
from .stream import Stream, StreamCredentials
from .util import get_iso8601_timestamp

logger = logging.getLogger(__name__)

PUBLISHER = "publisher"


class LiveDefaults(BaseModel):
    """Per-controller request defaults. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    domain_name: str
    app_name: str = ""
    video_center: str = DEFAULT_VIDEO_CENTER


class Live:
    """
    Controller for the Live API, bound to one CDN domain.

    Methods ending in ``_with_publisher`` use the default application name
    and the ``publisher`` stream type. An empty default application name
    means ``AppName`` is left out of requests.
    """

    def __init__(
        self,
        credentials: Credentials,
        domain_name: str,
        app_name: str = "",
        stream_credentials: StreamCredentials | None = None,
        *,
        client: Client | None = None,
    ):
        """
        Initialize the controller.

        Args:
            credentials: AccessKey pair for the API.
            domain_name: CDN acceleration domain; fixed for the controller.
            app_name: Default application name.
            stream_credentials: URL signing credentials; None disables signing.
            client: Optional pre-built RPC client.
        """
        self._owns_rpc = client is None
        self.rpc = client or Client(credentials)
        self.defaults = LiveDefaults(domain_name=domain_name, app_name=app_name)
        self.stream_credentials = stream_credentials

    @classmethod
    def from_config(cls, cfg: Config) -> "Live":
        """Build a controller, with its client, from settings."""
        credentials = Credentials(
            access_key_id=cfg.aliyun_access_key_id,
            access_key_secret=cfg.aliyun_access_key_secret,
        )
        stream_credentials = None
        if cfg.stream_private_key:
            stream_credentials = StreamCredentials(
                private_key=cfg.stream_private_key,
                timeout=timedelta(seconds=cfg.stream_auth_timeout),
            )

        client = Client(
            credentials,
            endpoint=cfg.live_endpoint,
            version=cfg.live_api_version,
            response_format=cfg.live_format,
            timeout=cfg.live_http_timeout,
        )
        live = cls(
            credentials,
            cfg.live_domain_name,
            cfg.live_app_name,
            stream_credentials,
            client=client,
        )
        live._owns_rpc = True
        return live.set_video_center(cfg.live_video_center).set_debug(cfg.live_debug)

    def get_stream(self, stream_name: str) -> Stream | None:
        """
        Get a stream of the default application.

        A new instance is returned on every call; uniqueness of stream names
        is up to the caller.

        Returns:
            The stream, or None if ``stream_name`` is empty.

        Raises:
            InvalidArgumentError: If no default app name is set.
        """
        if not stream_name:
            return None
        if not self.defaults.app_name:
            raise InvalidArgumentError("a default app_name is required to build stream URLs")

        credentials = None
        if self.stream_credentials is not None:
            credentials = self.stream_credentials.clone()

        defaults = self.defaults
        return Stream(
            domain_name=defaults.domain_name,
            app_name=defaults.app_name,
            stream_name=stream_name,
            video_center=defaults.video_center,
            stream_credentials=credentials,
            live=self,
        )

    def _new_request(self, action: str, app_name: str | None = None) -> LiveRequest:
        defaults = self.defaults
        if app_name is None:
            app_name = defaults.app_name
        return new_live_request(action, defaults.domain_name, app_name)

    def streams_publish_list(
        self, start_time: datetime, end_time: datetime
    ) -> PublishListResponse:
        """
        List publish records between two times.

        https://help.aliyun.com/document_detail/27191.html
        """
        req = self._new_request(DescribeLiveStreamsPublishListAction)
        req.set_args("StartTime", get_iso8601_timestamp(start_time))
        req.set_args("EndTime", get_iso8601_timestamp(end_time))
        return self.rpc.query(req, PublishListResponse)

    def streams_online_list(self) -> OnlineListResponse:
        """
        List streams currently being pushed.

        https://help.aliyun.com/document_detail/27192.html
        """
        req = self._new_request(DescribeLiveStreamsOnlineListAction)
        return self.rpc.query(req, OnlineListResponse)

    def streams_block_list(self) -> BlockListResponse:
        """
        List blacklisted streams of the domain. ``AppName`` is never sent.

        https://help.aliyun.com/document_detail/27193.html
        """
        req = self._new_request(DescribeLiveStreamsBlockListAction, app_name="")
        return self.rpc.query(req, BlockListResponse)

    def streams_control_history(
        self, start_time: datetime, end_time: datetime
    ) -> ControlHistoryResponse:
        """
        List forbid/resume operations between two times.

        https://help.aliyun.com/document_detail/27194.html
        """
        req = self._new_request(DescribeLiveStreamsControlHistoryAction)
        req.set_args("StartTime", get_iso8601_timestamp(start_time))
        req.set_args("EndTime", get_iso8601_timestamp(end_time))
        return self.rpc.query(req, ControlHistoryResponse)

    def forbid_live_stream(
        self,
        app_name: str,
        stream_name: str,
        live_stream_type: str,
        resume_time: datetime | None = None,
    ) -> Response:
        """
        Forbid a stream.

        Args:
            app_name: Application name; required.
            stream_name: Stream name.
            live_stream_type: ``publisher`` for the pushing side.
            resume_time: When the stream may resume; forever if None.

        Raises:
            InvalidArgumentError: If ``app_name`` is empty.
        """
        if not app_name:
            raise InvalidArgumentError("app_name should not be empty")

        req = self._new_request(ForbidLiveStreamAction, app_name=app_name)
        req.set_args("StreamName", stream_name)
        req.set_args("LiveStreamType", live_stream_type)
        if resume_time is not None:
            req.set_args("ResumeTime", get_iso8601_timestamp(resume_time))

        logger.info(f"Forbidding stream {app_name}/{stream_name} ({live_stream_type})")
        return self.rpc.query(req, Response)

    def forbid_live_stream_with_publisher(
        self, stream_name: str, resume_time: datetime | None = None
    ) -> Response:
        return self.forbid_live_stream(
            self.defaults.app_name, stream_name, PUBLISHER, resume_time
        )

    def resume_live_stream(
        self, app_name: str, stream_name: str, live_stream_type: str
    ) -> Response:
        """
        Resume a forbidden stream.

        Raises:
            InvalidArgumentError: If ``app_name`` is empty.
        """
        if not app_name:
            raise InvalidArgumentError("app_name should not be empty")

        req = self._new_request(ResumeLiveStreamAction, app_name=app_name)
        req.set_args("StreamName", stream_name)
        req.set_args("LiveStreamType", live_stream_type)

        logger.info(f"Resuming stream {app_name}/{stream_name} ({live_stream_type})")
        return self.rpc.query(req, Response)

    def resume_live_stream_with_publisher(self, stream_name: str) -> Response:
        return self.resume_live_stream(self.defaults.app_name, stream_name, PUBLISHER)

    @property
    def domain_name(self) -> str:
        return self.defaults.domain_name

    @property
    def app_name(self) -> str:
        return self.defaults.app_name

    @property
    def video_center(self) -> str:
        return self.defaults.video_center

    def set_app_name(self, app_name: str) -> "Live":
        self.defaults = self.defaults.model_copy(update={"app_name": app_name})
        return self

    def set_video_center(self, video_center: str) -> "Live":
        """
        Set the publish host.

        Defaults to ``video-center.alivecdn.com``; a custom domain CNAMEd to
        it works as well.
        """
        self.defaults = self.defaults.model_copy(update={"video_center": video_center})
        return self

    def set_stream_credentials(self, stream_credentials: StreamCredentials | None) -> "Live":
        self.stream_credentials = stream_credentials
        return self

    def set_debug(self, debug: bool) -> "Live":
        self.rpc.set_debug(debug)
        return self

    def close(self) -> None:
        """Close the RPC client if this controller created it."""
        if self._owns_rpc:
            self.rpc.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
