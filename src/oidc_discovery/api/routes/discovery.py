"""Discovery Routes

OpenID Connect discovery endpoints used by relying parties to find the
provider's endpoints and the keys that verify its ID tokens.

Standard endpoints:
- /.well-known/openid-configuration
- /.well-known/webfinger
- /oauth/discovery/keys (published as jwks_uri)
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from oidc_discovery.config.registry import get_provider_configuration
from oidc_discovery.domain.models.provider import ProviderConfiguration, RequestContext
from oidc_discovery.domain.services import jwks_exporter, metadata_assembler, webfinger

logger = logging.getLogger(__name__)

JRD_MEDIA_TYPE = "application/jrd+json"

# Create router for discovery endpoints
router = APIRouter(tags=["discovery"])


def get_request_context(request: Request) -> RequestContext:
    """Scheme and host of the current request"""
    return RequestContext(
        scheme=request.url.scheme,
        netloc=request.url.netloc,
        root_path=request.scope.get("root_path", "").rstrip("/"),
        forwarded_proto=request.headers.get("x-forwarded-proto"),
    )


@router.get("/.well-known/openid-configuration")
@router.get("/oauth/discovery/provider", include_in_schema=False)
async def get_openid_configuration(
    config: ProviderConfiguration = Depends(get_provider_configuration),
    context: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    """Get OpenID Connect discovery document

    Returns:
        OpenID Provider Metadata. end_session_endpoint and
        code_challenge_methods_supported are omitted unless configured.
    """
    metadata = metadata_assembler.assemble(config, context)

    logger.info("OpenID configuration endpoint accessed")
    return JSONResponse(content=metadata.to_document())


@router.get("/.well-known/webfinger")
@router.get("/oauth/discovery/webfinger", include_in_schema=False)
async def get_webfinger(
    resource: Optional[str] = Query(None, description="Resource identifier, e.g. acct:user@example.com"),
    config: ProviderConfiguration = Depends(get_provider_configuration),
) -> JSONResponse:
    """Resolve the issuer for a resource

    Raises:
        MissingParameterError: If resource is missing (mapped to 400)
    """
    document = webfinger.resolve(resource, config)

    logger.info("WebFinger endpoint accessed")
    return JSONResponse(content=document.model_dump(), media_type=JRD_MEDIA_TYPE)


@router.get("/oauth/discovery/keys")
async def get_jwks(
    config: ProviderConfiguration = Depends(get_provider_configuration),
) -> Dict[str, Any]:
    """Get JSON Web Key Set (JWKS)

    This endpoint provides the public key(s) used to sign ID tokens.
    Relying parties pick the key matching the token's kid header.

    Returns:
        JWKS document with public keys

    Example Response:
        {
            "keys": [
                {
                    "kty": "RSA",
                    "kid": "key-2024",
                    "e": "AQAB",
                    "n": "base64url-encoded-modulus",
                    "use": "sig",
                    "alg": "RS256"
                }
            ]
        }
    """
    jwks = jwks_exporter.export(config.signing_keys)

    logger.info("JWKS endpoint accessed")
    return jwks
