"""HMAC-SHA256 request signing for private endpoints.

BtcTurk authenticates a request with three headers:

- ``X-PCK``: the public API key
- ``X-Stamp``: a nonce (millisecond timestamp, unique per request)
- ``X-Signature``: base64(HMAC-SHA256(base64decode(secret), api_key + stamp))

The signer is pure. It never reads the clock and never remembers stamps;
uniqueness is the caller's job (see ``MonotonicNonce``), which keeps
signatures reproducible in tests.
"""

import base64
import binascii
import hashlib
import hmac

from btcturk.exceptions import InvalidSecretEncoding

API_KEY_HEADER = "X-PCK"
STAMP_HEADER = "X-Stamp"
SIGNATURE_HEADER = "X-Signature"
CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"


def decode_secret(api_secret: str) -> bytes:
    """Decode the base64 API secret into the raw HMAC key.

    Raises:
        InvalidSecretEncoding: If the secret is not strict base64.
    """
    try:
        return base64.b64decode(api_secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecretEncoding("API secret is not valid base64") from exc


def compute_signature(
    api_key: str,
    api_secret: str,
    nonce: int | str,
    body: bytes = b"",
    *,
    include_body: bool = False,
) -> str:
    """Return the base64 HMAC-SHA256 signature for one request.

    Args:
        api_key: Public key, first half of the signed message.
        api_secret: Base64-encoded private key used as the HMAC key.
        nonce: Stamp, second half of the signed message.
        body: Request body bytes.
        include_body: Append the body to the message. The exchange itself
            signs key+stamp only; this is for gateways that bind the payload.

    Raises:
        InvalidSecretEncoding: If the secret is not valid base64.
    """
    key = decode_secret(api_secret)
    message = f"{api_key}{nonce}".encode()
    if include_body:
        message += body
    digest = hmac.new(key, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(
    api_key: str,
    api_secret: str,
    nonce: int | str,
    body: bytes = b"",
    *,
    include_body: bool = False,
) -> dict[str, str]:
    """Build the authentication and content headers for one request.

    The exchange verifies a signature over ``api_key + stamp`` only, so by
    default the body is not covered and a changed body keeps the same
    signature. Pass ``include_body=True`` to append the body to the signed
    message; then any one-byte change in the body changes the signature.
    The exchange must expect the same scheme for such requests to verify.
    """
    signature = compute_signature(
        api_key, api_secret, nonce, body, include_body=include_body
    )
    return {
        API_KEY_HEADER: api_key,
        STAMP_HEADER: str(nonce),
        SIGNATURE_HEADER: signature,
        CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE,
    }


def verify(
    api_key: str,
    api_secret: str,
    nonce: int | str,
    signature: str,
    body: bytes = b"",
    *,
    include_body: bool = False,
) -> bool:
    """Constant-time check that signature matches the given inputs."""
    expected = compute_signature(
        api_key, api_secret, nonce, body, include_body=include_body
    )
    return hmac.compare_digest(expected, signature)
