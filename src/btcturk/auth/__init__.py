"""Request authentication -- HMAC signing, API keys, and nonce generation."""

from btcturk.auth.keys import ApiKeys
from btcturk.auth.nonce import MonotonicNonce
from btcturk.auth.signer import compute_signature, sign, verify

__all__ = ["ApiKeys", "MonotonicNonce", "compute_signature", "sign", "verify"]
