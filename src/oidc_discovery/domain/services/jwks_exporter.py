"""JWKS Exporter

Projects signing key material to its public JSON Web Key (RFC 7517).

Each key family publishes exactly this member set:
    RSA: kty, kid, e, n, use, alg
    EC:  kty, kid, crv, x, y, use, alg
    oct: kty, kid, use, alg

Private members (d, p, q, dp, dq, qi, k) are never part of a projection:
only public fields of the key material are read.
"""

import logging
from typing import Any, Dict, Iterable, List

from jwt.utils import base64url_encode, to_base64url_uint

from oidc_discovery.domain.exceptions import UnsupportedKeyTypeError
from oidc_discovery.domain.models.keys import (
    ECKeyMaterial,
    KeyMaterial,
    RSAKeyMaterial,
    SymmetricKeyMaterial,
)

logger = logging.getLogger(__name__)

KEY_USE = "sig"


def int_to_base64url(value: int) -> str:
    """Unpadded base64url of the minimal big-endian octets of value"""
    return to_base64url_uint(value).decode("ascii")


def coordinate_to_base64url(value: int, size: int) -> str:
    """Unpadded base64url of value as a fixed-size big-endian octet string

    EC coordinates keep their leading zero octets (RFC 7518, section 6.2.1.2).
    """
    return base64url_encode(value.to_bytes(size, byteorder="big")).decode("ascii")


def rsa_to_jwk(key: RSAKeyMaterial) -> Dict[str, Any]:
    return {
        "kty": "RSA",
        "kid": key.kid,
        "e": int_to_base64url(key.e),
        "n": int_to_base64url(key.n),
        "use": KEY_USE,
        "alg": key.alg,
    }


def ec_to_jwk(key: ECKeyMaterial) -> Dict[str, Any]:
    size = key.coordinate_size
    return {
        "kty": "EC",
        "kid": key.kid,
        "crv": key.crv,
        "x": coordinate_to_base64url(key.x, size),
        "y": coordinate_to_base64url(key.y, size),
        "use": KEY_USE,
        "alg": key.alg,
    }


def symmetric_to_jwk(key: SymmetricKeyMaterial) -> Dict[str, Any]:
    # The key value ("k") is never published
    return {
        "kty": "oct",
        "kid": key.kid,
        "use": KEY_USE,
        "alg": key.alg,
    }


def to_jwk(key: KeyMaterial) -> Dict[str, Any]:
    """Public JWK for a single key

    Raises:
        UnsupportedKeyTypeError: If key is not a known KeyMaterial variant
    """
    if isinstance(key, RSAKeyMaterial):
        return rsa_to_jwk(key)
    elif isinstance(key, ECKeyMaterial):
        return ec_to_jwk(key)
    elif isinstance(key, SymmetricKeyMaterial):
        return symmetric_to_jwk(key)

    logger.error(f"Cannot export signing key of type {type(key).__name__}")
    raise UnsupportedKeyTypeError(key)


def export(signing_keys: Iterable[KeyMaterial]) -> Dict[str, List[Dict[str, Any]]]:
    """JWKS document for the signing keys, in configuration order"""
    return {"keys": [to_jwk(key) for key in signing_keys]}
