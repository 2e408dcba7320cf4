from .jwt_decoder import ClaimDecoder, JwtClaimDecoder

__all__ = [
    "ClaimDecoder",
    "JwtClaimDecoder",
]
