"""Signing Key Material

Purpose: Describe the keys used to sign ID tokens

KeyMaterial is a closed set of three variants. Each variant only carries
what the JWKS document needs to publish, except SymmetricKeyMaterial, which
keeps its secret in a field that never leaves the process.

Key Components:
- RSAKeyMaterial: modulus and public exponent
- ECKeyMaterial: curve name and public point coordinates
- SymmetricKeyMaterial: HMAC key (identifier and algorithm are public)
"""

from dataclasses import dataclass, field
from typing import Union

from oidc_discovery.domain.exceptions import ConfigurationError

# JWA curve name -> (coordinate size in bytes, default signing algorithm)
EC_CURVES = {
    "P-256": (32, "ES256"),
    "P-384": (48, "ES384"),
    "P-521": (66, "ES512"),
}

RSA_ALGORITHMS = ("RS256", "RS384", "RS512", "PS256", "PS384", "PS512")
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


@dataclass(frozen=True)
class RSAKeyMaterial:
    """RSA public key

    Attributes:
        kid: Key identifier
        n: Modulus
        e: Public exponent
        alg: Signing algorithm (default RS256)
    """

    kid: str
    n: int
    e: int
    alg: str = "RS256"

    def __post_init__(self):
        if self.n <= 0 or self.e <= 0:
            raise ConfigurationError(f"RSA key {self.kid} must have a positive modulus and exponent")
        if self.alg not in RSA_ALGORITHMS:
            raise ConfigurationError(f"Algorithm {self.alg} is not valid for an RSA key")


@dataclass(frozen=True)
class ECKeyMaterial:
    """Elliptic curve public key

    Attributes:
        kid: Key identifier
        crv: JWA curve name (P-256, P-384 or P-521)
        x: Public point x coordinate
        y: Public point y coordinate
        alg: Signing algorithm, derived from the curve when omitted
    """

    kid: str
    crv: str
    x: int
    y: int
    alg: str = ""

    def __post_init__(self):
        if self.crv not in EC_CURVES:
            raise ConfigurationError(f"Unsupported EC curve: {self.crv}")
        curve_alg = EC_CURVES[self.crv][1]
        if not self.alg:
            object.__setattr__(self, "alg", curve_alg)
        elif self.alg != curve_alg:
            raise ConfigurationError(
                f"Algorithm {self.alg} does not match curve {self.crv} (expected {curve_alg})"
            )
        limit = 1 << (8 * self.coordinate_size)
        if not (0 <= self.x < limit and 0 <= self.y < limit):
            raise ConfigurationError(f"EC key {self.kid} has coordinates outside curve {self.crv}")

    @property
    def coordinate_size(self) -> int:
        """Octet length of each coordinate for this curve"""
        return EC_CURVES[self.crv][0]


@dataclass(frozen=True)
class SymmetricKeyMaterial:
    """HMAC shared secret

    The secret is excluded from repr and equality; it is kept only so the
    token layer can sign with the same object the discovery layer publishes.
    """

    kid: str
    alg: str = "HS256"
    secret: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self):
        if self.alg not in HMAC_ALGORITHMS:
            raise ConfigurationError(f"Algorithm {self.alg} is not valid for an HMAC key")


KeyMaterial = Union[RSAKeyMaterial, ECKeyMaterial, SymmetricKeyMaterial]
