"""Tests for the RPC client."""

import httpx
import pytest

from aliyun_live.client import Client, canonicalize, string_to_sign
from aliyun_live.credentials import Credentials
from aliyun_live.errors import ResponseDecodeError
from aliyun_live.models import PublishListResponse
from aliyun_live.request import LiveRequest
from aliyun_live.response import ErrorResponse, Response


@pytest.fixture
def credentials():
    return Credentials(access_key_id="testid", access_key_secret="testsecret")


def make_client(credentials, handler, response_format="JSON"):
    """Create a client whose HTTP traffic goes to ``handler``."""
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return Client(credentials, response_format=response_format, http_client=http)


def test_string_to_sign_matches_vendor_example():
    """Test canonicalization against the vendor's published example."""
    params = {
        "Timestamp": "2016-02-23T12:46:24Z",
        "Format": "XML",
        "AccessKeyId": "testid",
        "Action": "DescribeRegions",
        "SignatureMethod": "HMAC-SHA1",
        "SignatureNonce": "3ee8c1b8-83d3-44af-a94f-4e0ad82fd6cf",
        "Version": "2014-05-26",
        "SignatureVersion": "1.0",
    }

    assert string_to_sign("GET", params) == (
        "GET&%2F&AccessKeyId%3Dtestid%26Action%3DDescribeRegions%26Format%3DXML"
        "%26SignatureMethod%3DHMAC-SHA1%26SignatureNonce%3D3ee8c1b8-83d3-44af-a94f-4e0ad82fd6cf"
        "%26SignatureVersion%3D1.0%26Timestamp%3D2016-02-23T12%253A46%253A24Z"
        "%26Version%3D2014-05-26"
    )


def test_canonicalize_sorts_and_encodes():
    """Test that keys are sorted and values percent-encoded."""
    assert canonicalize({"b": "x y", "a": "1*"}) == "a=1%2A&b=x%20y"


def test_signed_params_contains_common_parameters(credentials):
    """Test the common parameters added to every request."""
    client = Client(credentials, http_client=httpx.Client())
    req = LiveRequest("ForbidLiveStream", "live.example.com", "app")

    params = client.signed_params(req)

    assert params["Action"] == "ForbidLiveStream"
    assert params["DomainName"] == "live.example.com"
    assert params["AppName"] == "app"
    assert params["Format"] == "JSON"
    assert params["Version"] == "2016-11-01"
    assert params["AccessKeyId"] == "testid"
    assert params["SignatureMethod"] == "HMAC-SHA1"
    assert params["SignatureVersion"] == "1.0"
    assert params["SignatureNonce"]
    assert params["Timestamp"].endswith("Z")


def test_signature_covers_all_other_parameters(credentials, monkeypatch):
    """Test that the signature is computed over every other parameter."""
    monkeypatch.setattr("aliyun_live.client.new_nonce", lambda: "nonce")
    client = Client(credentials, http_client=httpx.Client())
    req = LiveRequest("DescribeLiveStreamsOnlineList", "live.example.com")

    params = client.signed_params(req)
    signature = params.pop("Signature")

    assert signature == credentials.sign(string_to_sign("GET", params))


def test_query_sends_signed_get(credentials):
    """Test that query issues a GET with the signed parameters."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"RequestId": "req-1"})

    client = make_client(credentials, handler)
    result = client.query(LiveRequest("ResumeLiveStream", "live.example.com", "app"), Response)

    assert result.request_id == "req-1"
    assert seen["method"] == "GET"
    assert seen["params"]["Action"] == "ResumeLiveStream"
    assert "Signature" in seen["params"]


def test_query_decodes_typed_response(credentials):
    """Test decoding of a list response into its model."""
    body = {
        "RequestId": "req-2",
        "PublishInfo": {
            "LiveStreamPublishInfo": [
                {
                    "DomainName": "live.example.com",
                    "AppName": "app",
                    "StreamName": "s1",
                    "ClientAddr": "1.2.3.4",
                }
            ]
        },
    }
    client = make_client(credentials, lambda request: httpx.Response(200, json=body))

    result = client.query(LiveRequest("DescribeLiveStreamsPublishList", "d"), PublishListResponse)

    assert isinstance(result, PublishListResponse)
    assert result.publish_info[0].stream_name == "s1"
    assert result.publish_info[0].client_addr == "1.2.3.4"


def test_query_raises_error_response(credentials):
    """Test that a non-2xx reply raises ErrorResponse with the HTTP status."""
    body = {
        "RequestId": "req-3",
        "HostId": "live.aliyuncs.com",
        "Code": "InvalidStreamName.NotFound",
        "Message": "Stream does not exist.",
    }
    client = make_client(credentials, lambda request: httpx.Response(404, json=body))

    with pytest.raises(ErrorResponse) as exc_info:
        client.query(LiveRequest("ResumeLiveStream", "d", "app"), Response)

    error = exc_info.value
    assert error.request_id == "req-3"
    assert error.status_code == 404
    assert error.code == "InvalidStreamName.NotFound"
    assert error.host_id == "live.aliyuncs.com"


def test_query_raises_decode_error_for_malformed_body(credentials):
    """Test that an undecodable success body raises ResponseDecodeError."""
    client = make_client(credentials, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(ResponseDecodeError) as exc_info:
        client.query(LiveRequest("ResumeLiveStream", "d", "app"), Response)

    assert exc_info.value.body == "<html>"
    assert exc_info.value.status_code == 200


def test_query_raises_decode_error_for_malformed_error_body(credentials):
    """Test that an undecodable error body keeps the HTTP status."""
    page = "<html><body>502 Bad Gateway</body></html>"
    client = make_client(credentials, lambda request: httpx.Response(502, text=page))

    with pytest.raises(ResponseDecodeError) as exc_info:
        client.query(LiveRequest("ResumeLiveStream", "d", "app"), Response)

    assert exc_info.value.status_code == 502
    assert exc_info.value.body == page
    assert "502" in str(exc_info.value)


def test_query_propagates_transport_errors(credentials):
    """Test that transport failures are raised unchanged."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(credentials, handler)

    with pytest.raises(httpx.ConnectError):
        client.query(LiveRequest("ResumeLiveStream", "d", "app"), Response)


def test_query_xml_format(credentials):
    """Test XML responses decode into the same models."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["format"] = request.url.params["Format"]
        return httpx.Response(
            200,
            text=(
                "<?xml version='1.0' encoding='UTF-8'?>"
                "<ForbidLiveStreamResponse><RequestId>req-4</RequestId>"
                "</ForbidLiveStreamResponse>"
            ),
        )

    client = make_client(credentials, handler, response_format="xml")
    result = client.query(LiveRequest("ForbidLiveStream", "d", "app"), Response)

    assert seen["format"] == "XML"
    assert result.request_id == "req-4"


def test_query_xml_error(credentials):
    """Test XML error bodies raise ErrorResponse."""
    body = (
        "<Error><RequestId>req-5</RequestId><HostId>live.aliyuncs.com</HostId>"
        "<Code>Forbidden</Code><Message>denied</Message></Error>"
    )
    client = make_client(
        credentials, lambda request: httpx.Response(403, text=body), response_format="XML"
    )

    with pytest.raises(ErrorResponse) as exc_info:
        client.query(LiveRequest("ForbidLiveStream", "d", "app"), Response)

    assert exc_info.value.code == "Forbidden"
    assert exc_info.value.status_code == 403


def test_close_leaves_injected_http_client_open(credentials):
    """Test that an injected HTTP client is owned by the caller."""
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    with Client(credentials, http_client=http):
        pass

    assert not http.is_closed


def test_close_closes_owned_http_client(credentials):
    """Test that the client closes the HTTP client it created."""
    client = Client(credentials)
    client.close()

    assert client.http.is_closed
