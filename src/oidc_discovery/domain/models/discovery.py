"""Discovery Response Models

Purpose: Response shapes of the discovery endpoints

Optional members (end_session_endpoint, code_challenge_methods_supported)
are left unset rather than null and must be serialized with
exclude_none=True so the key is omitted from the document.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

WEBFINGER_ISSUER_RELATION = "http://openid.net/specs/connect/1.0/issuer"


class ProviderMetadata(BaseModel):
    """OpenID Provider Metadata (OpenID Connect Discovery 1.0, section 3)"""

    model_config = ConfigDict(frozen=True)

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    revocation_endpoint: str
    introspection_endpoint: str
    userinfo_endpoint: str
    jwks_uri: str
    end_session_endpoint: Optional[str] = None

    scopes_supported: List[str]
    response_types_supported: List[str]
    response_modes_supported: List[str]
    grant_types_supported: List[str]
    token_endpoint_auth_methods_supported: List[str]
    subject_types_supported: List[str]
    id_token_signing_alg_values_supported: List[str]
    claim_types_supported: List[str]
    claims_supported: List[str]
    code_challenge_methods_supported: Optional[List[str]] = None

    def to_document(self) -> dict:
        """JSON document with absent optional members omitted"""
        return self.model_dump(exclude_none=True)


class WebFingerLink(BaseModel):
    """Link relation in a WebFinger document"""

    rel: str = WEBFINGER_ISSUER_RELATION
    href: str


class WebFingerDocument(BaseModel):
    """JSON Resource Descriptor returned by WebFinger (RFC 7033)"""

    subject: str
    links: List[WebFingerLink] = Field(default_factory=list)
