"""Client library for the Aliyun ApsaraVideo Live API."""

from .client import Client
from .config import Config
from .credentials import Credentials
from .errors import InvalidArgumentError, LiveError, ResponseDecodeError
from .live import Live, LiveDefaults
from .models import (
    BlockListResponse,
    ControlHistoryResponse,
    ControlInfo,
    OnlineInfo,
    OnlineListResponse,
    PublishInfo,
    PublishListResponse,
)
from .request import LiveRequest, Request, new_live_request
from .response import ErrorResponse, Response
from .stream import Stream, StreamCredentials

__version__ = "0.1.0"

__all__ = [
    "BlockListResponse",
    "Client",
    "Config",
    "ControlHistoryResponse",
    "ControlInfo",
    "Credentials",
    "ErrorResponse",
    "InvalidArgumentError",
    "Live",
    "LiveDefaults",
    "LiveError",
    "LiveRequest",
    "OnlineInfo",
    "OnlineListResponse",
    "PublishInfo",
    "PublishListResponse",
    "Request",
    "Response",
    "ResponseDecodeError",
    "Stream",
    "StreamCredentials",
    "new_live_request",
]
