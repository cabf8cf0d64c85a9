"""Signing Key Loader

Loads PEM key files with `cryptography` and converts them to KeyMaterial.

Only public numbers are copied out of a loaded key. Private key objects are
not retained; the token layer loads its own copy for signing.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jwt.utils import base64url_encode

from oidc_discovery.domain.exceptions import ConfigurationError, UnsupportedKeyTypeError
from oidc_discovery.domain.models.keys import (
    EC_CURVES,
    ECKeyMaterial,
    KeyMaterial,
    RSAKeyMaterial,
    SymmetricKeyMaterial,
)
from oidc_discovery.domain.services.jwks_exporter import (
    coordinate_to_base64url,
    int_to_base64url,
)

logger = logging.getLogger(__name__)

# cryptography curve name -> JWA curve name
CURVE_NAMES = {
    "secp256r1": "P-256",
    "secp384r1": "P-384",
    "secp521r1": "P-521",
}


def jwk_thumbprint(members: dict) -> str:
    """RFC 7638 JWK thumbprint (SHA-256) of the required members"""
    canonical = json.dumps(members, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).digest()
    return base64url_encode(digest).decode("ascii")


def rsa_key_material(
    key: Union[rsa.RSAPrivateKey, rsa.RSAPublicKey],
    kid: Optional[str] = None,
    alg: Optional[str] = None,
) -> RSAKeyMaterial:
    """KeyMaterial for an RSA key (private keys contribute only public numbers)"""
    if isinstance(key, rsa.RSAPrivateKey):
        key = key.public_key()
    numbers = key.public_numbers()
    if not kid:
        kid = jwk_thumbprint(
            {"e": int_to_base64url(numbers.e), "kty": "RSA", "n": int_to_base64url(numbers.n)}
        )
    return RSAKeyMaterial(kid=kid, n=numbers.n, e=numbers.e, alg=alg or "RS256")


def ec_key_material(
    key: Union[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey],
    kid: Optional[str] = None,
    alg: Optional[str] = None,
) -> ECKeyMaterial:
    """KeyMaterial for an EC key on one of the JWA curves"""
    if isinstance(key, ec.EllipticCurvePrivateKey):
        key = key.public_key()
    crv = CURVE_NAMES.get(key.curve.name)
    if crv is None:
        raise ConfigurationError(f"Unsupported EC curve: {key.curve.name}")
    numbers = key.public_numbers()
    if not kid:
        size = EC_CURVES[crv][0]
        kid = jwk_thumbprint(
            {
                "crv": crv,
                "kty": "EC",
                "x": coordinate_to_base64url(numbers.x, size),
                "y": coordinate_to_base64url(numbers.y, size),
            }
        )
    return ECKeyMaterial(kid=kid, crv=crv, x=numbers.x, y=numbers.y, alg=alg or "")


def symmetric_key_material(
    secret: Union[str, bytes],
    kid: Optional[str] = None,
    alg: Optional[str] = None,
) -> SymmetricKeyMaterial:
    """KeyMaterial for an HMAC shared secret

    The kid must be given: any id derived from the secret would let anyone
    holding the published JWKS test guesses of the secret offline.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    if not secret:
        raise ConfigurationError("HMAC secret must not be empty")
    if not kid:
        raise ConfigurationError("HMAC signing keys require an explicit key id")
    return SymmetricKeyMaterial(kid=kid, alg=alg or "HS256", secret=secret)


def key_material_from_key(key, kid: Optional[str] = None, alg: Optional[str] = None) -> KeyMaterial:
    """KeyMaterial for a `cryptography` key object

    Raises:
        UnsupportedKeyTypeError: If the key is neither RSA nor EC
    """
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return rsa_key_material(key, kid=kid, alg=alg)
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return ec_key_material(key, kid=kid, alg=alg)
    raise UnsupportedKeyTypeError(key)


def load_key_file(key_path: str, kid: Optional[str] = None, alg: Optional[str] = None) -> KeyMaterial:
    """Load a PEM private or public key file

    Args:
        key_path: Path to the PEM file
        kid: Key identifier (defaults to the RFC 7638 thumbprint)
        alg: Signing algorithm (defaults from the key family)

    Returns:
        KeyMaterial for the key

    Raises:
        ConfigurationError: If the file is missing or not a supported PEM key
    """
    path = Path(key_path)
    if not path.exists():
        raise ConfigurationError(f"Signing key not found: {key_path}")

    with open(path, "rb") as f:
        data = f.read()

    try:
        if b"PRIVATE KEY" in data:
            key = serialization.load_pem_private_key(data, password=None, backend=default_backend())
        else:
            key = serialization.load_pem_public_key(data, backend=default_backend())
    except (ValueError, TypeError) as e:
        logger.error(f"Failed to load signing key: {e}")
        raise ConfigurationError(f"Cannot load signing key from {key_path}: {e}") from e

    material = key_material_from_key(key, kid=kid, alg=alg)
    logger.info(f"Loaded {type(material).__name__} from {key_path} (kid={material.kid}, alg={material.alg})")
    return material


def generate_rsa_key_material(kid: Optional[str] = None, alg: Optional[str] = None) -> RSAKeyMaterial:
    """Generate an in-memory RSA key for development use"""
    private_key = rsa.generate_private_key(
        public_exponent=65537, key_size=2048, backend=default_backend()
    )
    material = rsa_key_material(private_key, kid=kid, alg=alg)
    logger.warning(f"No signing key configured, generated ephemeral RSA key (kid={material.kid})")
    return material
