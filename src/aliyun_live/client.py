"""RPC client for signing and sending Live API requests."""

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_API_VERSION, DEFAULT_ENDPOINT
from .credentials import SIGNATURE_METHOD, SIGNATURE_VERSION, Credentials
from .errors import ResponseDecodeError
from .request import Request
from .response import ErrorPayload, ErrorResponse, decode_body, parse_response
from .util import get_iso8601_timestamp, new_nonce, percent_encode, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def canonicalize(params: dict[str, str]) -> str:
    """Sort parameters by key and join them as an encoded query string."""
    return "&".join(
        f"{percent_encode(key)}={percent_encode(params[key])}" for key in sorted(params)
    )


def string_to_sign(method: str, params: dict[str, str]) -> str:
    return f"{method}&{percent_encode('/')}&{percent_encode(canonicalize(params))}"


class Client:
    """Client for the Live RPC-style API."""

    def __init__(
        self,
        credentials: Credentials,
        endpoint: str = DEFAULT_ENDPOINT,
        version: str = DEFAULT_API_VERSION,
        response_format: str = "JSON",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            credentials: AccessKey pair used to sign requests.
            endpoint: API endpoint URL.
            version: API version parameter.
            response_format: ``JSON`` or ``XML``.
            timeout: HTTP timeout in seconds, used when no client is given.
            http_client: Optional pre-built ``httpx.Client``; the caller keeps
                ownership of it.
        """
        self.credentials = credentials
        self.endpoint = endpoint
        self.version = version
        self.response_format = response_format.upper()
        self.debug = False
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(timeout=httpx.Timeout(timeout))

    def set_debug(self, debug: bool) -> "Client":
        self.debug = debug
        return self

    def signed_params(self, req: Request) -> dict[str, str]:
        """
        Add the common parameters to a request and sign it.

        Args:
            req: The request to sign.

        Returns:
            All query parameters, ``Signature`` included.
        """
        params = req.to_params()
        params.update(
            {
                "Format": self.response_format,
                "Version": self.version,
                "AccessKeyId": self.credentials.access_key_id,
                "SignatureMethod": SIGNATURE_METHOD,
                "SignatureVersion": SIGNATURE_VERSION,
                "SignatureNonce": new_nonce(),
                "Timestamp": get_iso8601_timestamp(utc_now()),
            }
        )
        params["Signature"] = self.credentials.sign(string_to_sign("GET", params))
        return params

    def query(self, req: Request, response_model: type[T]) -> T:
        """
        Send a request and decode the reply.

        Args:
            req: The request to send.
            response_model: Model the successful body is decoded into.

        Returns:
            The decoded response.

        Raises:
            ErrorResponse: The API answered with a non-2xx status.
            ResponseDecodeError: The body could not be decoded.
            httpx.HTTPError: The request failed at the transport level.
        """
        params = self.signed_params(req)
        if self.debug:
            logger.debug(f"{req.action} request params: {params}")

        try:
            response = self.http.get(self.endpoint, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{req.action} request failed: {e}")
            raise

        body = response.text
        if self.debug:
            logger.debug(f"{req.action} response ({response.status_code}): {body}")

        if not response.is_success:
            raise self._error_from(response.status_code, body)

        try:
            result = parse_response(response_model, body, self.response_format)
        except ResponseDecodeError as e:
            e.status_code = response.status_code
            raise
        logger.info(f"{req.action} succeeded (RequestId: {getattr(result, 'request_id', '')})")
        return result

    def _error_from(self, status_code: int, body: str) -> ErrorResponse:
        try:
            payload = ErrorPayload.model_validate(decode_body(body, self.response_format))
        except (ResponseDecodeError, ValidationError) as e:
            logger.error(f"Undecodable error reply (HTTP {status_code}): {e}")
            raise ResponseDecodeError(
                f"HTTP {status_code} with undecodable error body: {e}", body, status_code
            ) from e

        error = ErrorResponse.from_payload(payload, status_code)
        logger.warning(
            f"API error {error.code} (HTTP {status_code}, RequestId: {error.request_id}): "
            f"{error.message}"
        )
        return error

    def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
