"""WebFinger Resolver

Resolves a resource identifier to the issuer that serves it
(OpenID Connect Discovery 1.0, section 2). The resource is echoed back
verbatim; only its presence is checked.
"""

from typing import Optional

from oidc_discovery.domain.exceptions import MissingParameterError
from oidc_discovery.domain.models.discovery import (
    WEBFINGER_ISSUER_RELATION,
    WebFingerDocument,
    WebFingerLink,
)
from oidc_discovery.domain.models.provider import ProviderConfiguration


def resolve(resource: Optional[str], config: ProviderConfiguration) -> WebFingerDocument:
    """Build the WebFinger document for a resource

    Raises:
        MissingParameterError: If resource is missing or empty
    """
    if not resource:
        raise MissingParameterError("resource")

    return WebFingerDocument(
        subject=resource,
        links=[WebFingerLink(rel=WEBFINGER_ISSUER_RELATION, href=config.issuer)],
    )
