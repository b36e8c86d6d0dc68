"""API key pair used to authenticate private endpoints."""

from dataclasses import dataclass, field

from btcturk.auth.signer import decode_secret


@dataclass(frozen=True)
class ApiKeys:
    """Public/private key pair.

    The private key is validated as base64 on construction so a bad secret
    fails when it is configured, not on the first order. ``repr`` never
    shows the private key.

    Raises:
        InvalidSecretEncoding: If private_key is not valid base64.
    """

    public_key: str
    private_key: str = field(repr=False)

    def __post_init__(self) -> None:
        decode_secret(self.private_key)
