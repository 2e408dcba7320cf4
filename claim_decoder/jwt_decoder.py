from __future__ import annotations

from typing import Any, Protocol

import jwt

from contracts.errors import ClaimDecodeError
from contracts.schemas import ClaimMap, JwtPart


class ClaimDecoder(Protocol):
    def decode(self, blob: str, part: JwtPart) -> ClaimMap: ...


class JwtClaimDecoder:
    """
    Decodes a compact JWT into its header or body claims.

    Signatures, expiry, audience and issuer are not checked here; trust
    validation belongs to the caller's token pipeline.
    """

    def decode(self, blob: str, part: JwtPart = JwtPart.BODY) -> ClaimMap:
        part = JwtPart(part)
        try:
            if part is JwtPart.HEADER:
                claims: Any = jwt.get_unverified_header(blob)
            else:
                claims = jwt.decode(blob, options={"verify_signature": False})
        except jwt.PyJWTError as exc:
            raise ClaimDecodeError(f"malformed {part.value} in claim blob: {exc}") from exc

        if not isinstance(claims, dict):
            raise ClaimDecodeError(f"claim blob {part.value} is not a JSON object")
        return claims
