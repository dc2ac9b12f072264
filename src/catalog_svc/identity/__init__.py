"""Identity extraction for catalog callers."""

from .types import CallerIdentity
from .extractor import IdentityExtractor, decode_jwt_payload, extract_identity

__all__ = [
    "CallerIdentity",
    "IdentityExtractor",
    "decode_jwt_payload",
    "extract_identity",
]
