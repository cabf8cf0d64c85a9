"""Signing key loading"""

from oidc_discovery.infrastructure.keys.key_loader import (
    generate_rsa_key_material,
    jwk_thumbprint,
    key_material_from_key,
    load_key_file,
    symmetric_key_material,
)

__all__ = [
    "generate_rsa_key_material",
    "jwk_thumbprint",
    "key_material_from_key",
    "load_key_file",
    "symmetric_key_material",
]
