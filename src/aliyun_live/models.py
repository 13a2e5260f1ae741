"""Typed response models for the Live API actions."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from .response import Response, VendorModel


def _items(key: str) -> BeforeValidator:
    """
    Unwrap ``{"<key>": [...]}`` containers into a list.

    XML bodies yield a dict for a single item and an empty string for no
    items; both are normalized here.
    """

    def unwrap(value: Any) -> Any:
        if isinstance(value, dict):
            value = value.get(key, [])
        if value is None or value == "":
            return []
        if not isinstance(value, list):
            return [value]
        return value

    return BeforeValidator(unwrap)


class PublishInfo(VendorModel):
    """A single publish record."""

    domain_name: str = ""
    app_name: str = ""
    stream_name: str = ""
    stream_url: str = ""
    publish_time: str = ""
    stop_time: str = ""
    client_addr: str = ""
    edge_node_addr: str = ""
    publish_url: str = ""
    publish_domain: str = ""
    publish_type: str = ""


class OnlineInfo(VendorModel):
    """A stream that is currently being pushed."""

    domain_name: str = ""
    app_name: str = ""
    stream_name: str = ""
    publish_time: str = ""
    publish_url: str = ""
    publish_domain: str = ""
    publish_type: str = ""
    client_addr: str = ""


class ControlInfo(VendorModel):
    """A forbid/resume history entry."""

    stream_name: str = ""
    client_ip: str = Field(default="", alias="ClientIP")
    action: str = ""
    time_stamp: str = ""


class PublishListResponse(Response):
    publish_info: Annotated[list[PublishInfo], _items("LiveStreamPublishInfo")] = []


class OnlineListResponse(Response):
    online_info: Annotated[list[OnlineInfo], _items("LiveStreamOnlineInfo")] = []


class BlockListResponse(Response):
    """Blacklisted streams; each url has the form ``<domain>/<app>/<stream>``."""

    domain_name: str = ""
    stream_urls: Annotated[list[str], _items("StreamUrl")] = []


class ControlHistoryResponse(Response):
    control_info: Annotated[list[ControlInfo], _items("LiveStreamControlInfo")] = []
