"""Provider Metadata Assembler

Builds the OpenID Provider Metadata document served at
/.well-known/openid-configuration from the current configuration snapshot.

Endpoint URLs are rendered against the host of the request being served.
When the configured protocol resolves to a scheme, that scheme replaces the
request's own for every endpoint URL.
"""

import logging

from oidc_discovery.domain.models.discovery import ProviderMetadata
from oidc_discovery.domain.models.provider import ProviderConfiguration, RequestContext

logger = logging.getLogger(__name__)

BASE_GRANT_TYPES = ("authorization_code", "client_credentials")
REFRESH_TOKEN_GRANT = "refresh_token"

# Claims every ID token carries, published ahead of the configured ones
STANDARD_CLAIMS = ("iss", "sub", "aud", "exp", "iat")

RESPONSE_TYPES_SUPPORTED = ("code", "token", "id_token", "id_token token")
RESPONSE_MODES_SUPPORTED = ("query", "fragment")
TOKEN_ENDPOINT_AUTH_METHODS_SUPPORTED = ("client_secret_basic", "client_secret_post")
SUBJECT_TYPES_SUPPORTED = ("public",)
CLAIM_TYPES_SUPPORTED = ("normal",)
CODE_CHALLENGE_METHODS_SUPPORTED = ("plain", "S256")


def grant_types_supported(config: ProviderConfiguration) -> list[str]:
    """Grant types in publication order: base grants, then refresh_token"""
    grants = list(BASE_GRANT_TYPES)
    if config.use_refresh_token:
        grants.append(REFRESH_TOKEN_GRANT)
    return grants


def claims_supported(config: ProviderConfiguration) -> list[str]:
    """Standard claims followed by the configured claim names"""
    names = list(STANDARD_CLAIMS)
    names.extend(claim.name for claim in config.claims if claim.name not in STANDARD_CLAIMS)
    return names


def signing_algorithms(config: ProviderConfiguration) -> list[str]:
    """Distinct algorithms of the configured signing keys, in key order"""
    return list(dict.fromkeys(key.alg for key in config.signing_keys))


def assemble(config: ProviderConfiguration, context: RequestContext) -> ProviderMetadata:
    """Build the provider metadata document

    Args:
        config: Provider configuration snapshot
        context: Scheme and host of the request being served

    Returns:
        ProviderMetadata; serialize with to_document() so unset optional
        members are omitted
    """
    scheme = config.resolve_protocol(context)
    routes = config.routes

    def url(path: str) -> str:
        return context.url_for(path, scheme=scheme)

    optional = {}
    end_session_endpoint = config.resolve_end_session_endpoint(context)
    if end_session_endpoint:
        optional["end_session_endpoint"] = end_session_endpoint
    if config.pkce_enabled:
        optional["code_challenge_methods_supported"] = list(CODE_CHALLENGE_METHODS_SUPPORTED)

    metadata = ProviderMetadata(
        issuer=config.issuer,
        authorization_endpoint=url(routes.authorization),
        token_endpoint=url(routes.token),
        revocation_endpoint=url(routes.revocation),
        introspection_endpoint=url(routes.introspection),
        userinfo_endpoint=url(routes.userinfo),
        jwks_uri=url(routes.jwks),
        scopes_supported=list(config.scopes),
        response_types_supported=list(RESPONSE_TYPES_SUPPORTED),
        response_modes_supported=list(RESPONSE_MODES_SUPPORTED),
        grant_types_supported=grant_types_supported(config),
        token_endpoint_auth_methods_supported=list(TOKEN_ENDPOINT_AUTH_METHODS_SUPPORTED),
        subject_types_supported=list(SUBJECT_TYPES_SUPPORTED),
        id_token_signing_alg_values_supported=signing_algorithms(config),
        claim_types_supported=list(CLAIM_TYPES_SUPPORTED),
        claims_supported=claims_supported(config),
        **optional,
    )

    logger.debug(
        f"Assembled provider metadata (version={config.version}, scheme={scheme or context.scheme})"
    )
    return metadata
