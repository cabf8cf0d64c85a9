"""Provider Configuration Models

Purpose: Immutable snapshot of everything the discovery endpoints publish

A ProviderConfiguration is built once at startup (see
oidc_discovery.config.registry) and shared read-only by every request.
Changing it means building a new snapshot; requests that already hold the
previous one keep using it.

Key Components:
- RequestContext: scheme and host of the request being served
- OAuth2Routes: relative paths owned by the underlying OAuth2 server
- ClaimDefinition: a claim the provider can put in ID tokens or userinfo
- ProviderConfiguration: the snapshot itself
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from oidc_discovery.domain.exceptions import ConfigurationError, UnsupportedKeyTypeError
from oidc_discovery.domain.models.keys import (
    ECKeyMaterial,
    KeyMaterial,
    RSAKeyMaterial,
    SymmetricKeyMaterial,
)


@dataclass(frozen=True)
class RequestContext:
    """Scheme and host of the incoming request

    Attributes:
        scheme: URL scheme the request arrived with (http, https)
        netloc: Host with optional port (e.g. "auth.example.com:8443")
        root_path: Mount prefix of the application, without trailing slash
        forwarded_proto: X-Forwarded-Proto header sent by a reverse proxy
    """

    scheme: str
    netloc: str
    root_path: str = ""
    forwarded_proto: Optional[str] = None

    def url_for(self, path: str, scheme: Optional[str] = None) -> str:
        """Absolute URL for a path on this host"""
        return f"{scheme or self.scheme}://{self.netloc}{self.root_path}{path}"


# A fixed scheme, a per-request callable, or None to keep the request scheme
ProtocolResolver = Callable[[RequestContext], Optional[str]]
ProtocolOption = Union[str, ProtocolResolver, None]

FORWARDED_SCHEMES = ("http", "https")


def forwarded_protocol(context: RequestContext) -> Optional[str]:
    """Protocol resolver that follows the proxy's X-Forwarded-Proto header

    Only http and https are accepted; any other value keeps the request scheme.
    """
    if context.forwarded_proto:
        proto = context.forwarded_proto.split(",")[0].strip().lower()
        if proto in FORWARDED_SCHEMES:
            return proto
    return None


EndSessionResolver = Callable[[RequestContext], Optional[str]]
EndSessionOption = Union[str, EndSessionResolver, None]


@dataclass(frozen=True)
class OAuth2Routes:
    """Relative endpoint paths of the OAuth2 server"""

    authorization: str = "/oauth/authorize"
    token: str = "/oauth/token"
    revocation: str = "/oauth/revoke"
    introspection: str = "/oauth/introspect"
    userinfo: str = "/oauth/userinfo"
    jwks: str = "/oauth/discovery/keys"

    @classmethod
    def with_prefix(cls, prefix: str) -> "OAuth2Routes":
        """Routes mounted under a different OAuth2 path prefix"""
        prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
        return cls(
            authorization=f"{prefix}/authorize",
            token=f"{prefix}/token",
            revocation=f"{prefix}/revoke",
            introspection=f"{prefix}/introspect",
            userinfo=f"{prefix}/userinfo",
            jwks=f"{prefix}/discovery/keys",
        )


CLAIM_RESPONSES = frozenset({"id_token", "user_info"})


@dataclass(frozen=True)
class ClaimDefinition:
    """Claim the provider can release

    Attributes:
        name: Claim name as it appears in tokens
        scope: Scope that grants access to the claim
        response: Where the claim is released (id_token, user_info)
        generator: Resolver used by the token layer to compute the value
    """

    name: str
    scope: str = "profile"
    response: frozenset = CLAIM_RESPONSES
    generator: Optional[Callable] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("Claim name must not be empty")
        unknown = set(self.response) - CLAIM_RESPONSES
        if unknown:
            raise ConfigurationError(f"Claim {self.name} has unknown response types: {sorted(unknown)}")
        object.__setattr__(self, "response", frozenset(self.response))


@dataclass(frozen=True)
class ProviderConfiguration:
    """Read-only provider configuration snapshot

    Validated on construction: an invalid snapshot never reaches a request.

    Attributes:
        issuer: Issuer identifier URL
        signing_keys: ID token signing keys, in publication order
        protocol: Scheme override for endpoint URLs
        use_refresh_token: Whether the OAuth2 server issues refresh tokens
        end_session_endpoint: RP-initiated logout URL, absent when None
        claims: Configured claims, in publication order
        scopes: Supported scopes; openid is always included
        routes: OAuth2 server endpoint paths
        pkce_enabled: Whether PKCE code challenges are accepted
        version: Snapshot version, bumped on every reconfiguration
    """

    issuer: str
    signing_keys: tuple
    protocol: ProtocolOption = None
    use_refresh_token: bool = False
    end_session_endpoint: EndSessionOption = None
    claims: tuple = ()
    scopes: tuple = ("openid",)
    routes: OAuth2Routes = field(default_factory=OAuth2Routes)
    pkce_enabled: bool = False
    version: int = 1

    def __post_init__(self):
        if not self.issuer or not str(self.issuer).strip():
            raise ConfigurationError("Issuer must be configured")

        keys = tuple(self.signing_keys)
        if not keys:
            raise ConfigurationError("At least one signing key must be configured")
        for key in keys:
            if not isinstance(key, (RSAKeyMaterial, ECKeyMaterial, SymmetricKeyMaterial)):
                raise UnsupportedKeyTypeError(key)
        kids = [key.kid for key in keys]
        if len(set(kids)) != len(kids):
            raise ConfigurationError(f"Signing key ids must be unique: {kids}")
        object.__setattr__(self, "signing_keys", keys)

        claims = tuple(self.claims)
        names = [claim.name for claim in claims]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Claim names must be unique: {names}")
        object.__setattr__(self, "claims", claims)

        scopes = tuple(dict.fromkeys(self.scopes))
        if "openid" not in scopes:
            scopes = ("openid",) + scopes
        object.__setattr__(self, "scopes", scopes)

    @property
    def signing_key(self) -> KeyMaterial:
        """Current signing key (the first configured)"""
        return self.signing_keys[0]

    def resolve_protocol(self, context: RequestContext) -> Optional[str]:
        """Scheme override for this request, or None"""
        if callable(self.protocol):
            return self.protocol(context)
        return self.protocol

    def resolve_end_session_endpoint(self, context: RequestContext) -> Optional[str]:
        """End session URL for this request, or None when not configured"""
        if callable(self.end_session_endpoint):
            return self.end_session_endpoint(context)
        return self.end_session_endpoint

    def replace(self, **changes) -> "ProviderConfiguration":
        """New snapshot with the given fields changed and the version bumped"""
        changes.setdefault("version", self.version + 1)
        return dataclasses.replace(self, **changes)
