"""API response types and body decoding."""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_pascal

from .errors import LiveError, ResponseDecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class VendorModel(BaseModel):
    """Base for models mirroring the API's PascalCase payloads."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )


class Response(VendorModel):
    """Response of actions that only return a request id."""

    request_id: str = ""


class ErrorPayload(VendorModel):
    """Error body returned by the API."""

    request_id: str = ""
    recommend: str = ""
    host_id: str = ""
    code: str = ""
    message: str = ""
    status_code: int = 0


class ErrorResponse(LiveError):
    """Error returned by the API, raised from ``Client.query``."""

    def __init__(
        self,
        request_id: str = "",
        recommend: str = "",
        host_id: str = "",
        code: str = "",
        message: str = "",
        status_code: int = 0,
    ):
        self.request_id = request_id
        self.recommend = recommend
        self.host_id = host_id
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(str(self))

    @classmethod
    def from_payload(cls, payload: ErrorPayload, status_code: int) -> "ErrorResponse":
        """Build the error from a decoded body; the HTTP status wins over the body's."""
        return cls(
            request_id=payload.request_id,
            recommend=payload.recommend,
            host_id=payload.host_id,
            code=payload.code,
            message=payload.message,
            status_code=status_code,
        )

    def __str__(self) -> str:
        return (
            "Aliyun API Error:\n"
            f" RequestId: {self.request_id}\n"
            f" Status Code: {self.status_code}\n"
            f" Code: {self.code}\n"
            f" Message: {self.message}\n"
        )


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        return (element.text or "").strip()

    result: dict[str, Any] = {}
    for child in children:
        value = _element_to_value(child)
        if child.tag in result:
            # Repeated tags become a list
            if not isinstance(result[child.tag], list):
                result[child.tag] = [result[child.tag]]
            result[child.tag].append(value)
        else:
            result[child.tag] = value
    return result


def xml_to_dict(text: str) -> dict[str, Any]:
    """
    Convert an XML response document into a plain dictionary.

    The root element (e.g. ``<Error>`` or ``<ForbidLiveStreamResponse>``) is
    dropped, so JSON and XML bodies map onto the same models.
    """
    root = ET.fromstring(text)
    value = _element_to_value(root)
    if isinstance(value, dict):
        return value
    return {}


def decode_body(text: str, response_format: str) -> dict[str, Any]:
    """
    Decode a raw response body.

    Args:
        text: The response body.
        response_format: ``JSON`` or ``XML``.

    Returns:
        The decoded object.

    Raises:
        ResponseDecodeError: If the body is not valid for the format.
    """
    try:
        if response_format == "XML":
            data = xml_to_dict(text)
        else:
            data = json.loads(text)
    except (ValueError, ET.ParseError) as e:
        raise ResponseDecodeError(f"Malformed {response_format} response: {e}", text) from e

    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"Expected a {response_format} object, got {type(data).__name__}", text
        )
    return data


def parse_response(model: type[T], text: str, response_format: str) -> T:
    """Decode a body straight into ``model``."""
    data = decode_body(text, response_format)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Response does not match {model.__name__}: {e}")
        raise ResponseDecodeError(f"Invalid {model.__name__} payload: {e}", text) from e
