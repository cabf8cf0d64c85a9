"""Domain models for the discovery service"""

from oidc_discovery.domain.models.discovery import (
    WEBFINGER_ISSUER_RELATION,
    ProviderMetadata,
    WebFingerDocument,
    WebFingerLink,
)
from oidc_discovery.domain.models.keys import (
    EC_CURVES,
    ECKeyMaterial,
    KeyMaterial,
    RSAKeyMaterial,
    SymmetricKeyMaterial,
)
from oidc_discovery.domain.models.provider import (
    ClaimDefinition,
    OAuth2Routes,
    ProviderConfiguration,
    RequestContext,
)

__all__ = [
    # Key models
    "KeyMaterial",
    "RSAKeyMaterial",
    "ECKeyMaterial",
    "SymmetricKeyMaterial",
    "EC_CURVES",
    # Configuration models
    "ProviderConfiguration",
    "ClaimDefinition",
    "OAuth2Routes",
    "RequestContext",
    # Response models
    "ProviderMetadata",
    "WebFingerDocument",
    "WebFingerLink",
    "WEBFINGER_ISSUER_RELATION",
]
