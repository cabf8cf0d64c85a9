"""Discovery services: metadata assembly, WebFinger resolution, JWKS export"""

from oidc_discovery.domain.services import jwks_exporter, metadata_assembler, webfinger

__all__ = ["jwks_exporter", "metadata_assembler", "webfinger"]
