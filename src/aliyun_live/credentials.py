"""API credentials and RPC request signing."""

import base64
import hashlib
import hmac

from pydantic import BaseModel, ConfigDict, Field

SIGNATURE_METHOD = "HMAC-SHA1"
SIGNATURE_VERSION = "1.0"


class Credentials(BaseModel):
    """AccessKey pair used to sign API requests."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    access_key_secret: str = Field(repr=False)

    def sign(self, string_to_sign: str) -> str:
        """
        Sign a canonical request string.

        Args:
            string_to_sign: The string built from the HTTP method and the
                canonicalized query.

        Returns:
            Base64 encoded HMAC-SHA1 digest keyed with ``secret + "&"``.
        """
        key = f"{self.access_key_secret}&".encode("utf-8")
        digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("ascii")
