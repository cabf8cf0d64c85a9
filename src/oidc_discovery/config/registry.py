"""Provider Configuration Registry

Holds the current ProviderConfiguration snapshot for the process.

The snapshot is built once during application startup. Reconfiguration swaps
in a new snapshot with a bumped version; it is an administrative operation
meant to run before traffic is served. Requests read the snapshot through
get_provider_configuration() and keep the reference they got.
"""

import logging
import threading
from typing import Optional

from oidc_discovery.config.settings import Settings
from oidc_discovery.domain.exceptions import ConfigurationError
from oidc_discovery.domain.models.provider import (
    ClaimDefinition,
    OAuth2Routes,
    ProviderConfiguration,
    forwarded_protocol,
)
from oidc_discovery.infrastructure.keys.key_loader import (
    generate_rsa_key_material,
    load_key_file,
    symmetric_key_material,
)

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_provider_configuration: Optional[ProviderConfiguration] = None


def build_provider_configuration(settings: Settings) -> ProviderConfiguration:
    """Build a configuration snapshot from settings

    Raises:
        ConfigurationError: If the issuer or signing keys are invalid
    """
    if not settings.oidc_issuer:
        raise ConfigurationError("OIDC_ISSUER must be set")

    key_ids = settings.signing_key_ids
    key_paths = settings.signing_key_paths
    key_count = len(key_paths) + (1 if settings.oidc_hmac_secret else 0)
    if len(key_ids) > key_count:
        raise ConfigurationError(f"{len(key_ids)} signing key ids configured for {key_count} keys")

    signing_keys = []
    for index, path in enumerate(key_paths):
        kid = key_ids[index] if index < len(key_ids) else None
        signing_keys.append(load_key_file(path, kid=kid, alg=settings.oidc_signing_algorithm))

    if settings.oidc_hmac_secret:
        index = len(key_paths)
        kid = key_ids[index] if index < len(key_ids) else None
        if kid is None:
            raise ConfigurationError(
                f"OIDC_SIGNING_KEY_IDS must give a key id for the HMAC secret (position {index + 1})"
            )
        alg = settings.oidc_signing_algorithm if not key_paths else None
        signing_keys.append(symmetric_key_material(settings.oidc_hmac_secret, kid=kid, alg=alg))

    if not signing_keys:
        if settings.environment == "production":
            raise ConfigurationError("No signing key configured")
        signing_keys.append(generate_rsa_key_material(alg=settings.oidc_signing_algorithm))

    protocol = settings.oidc_protocol
    if not protocol and settings.oidc_trust_forwarded_proto:
        protocol = forwarded_protocol

    return ProviderConfiguration(
        issuer=settings.oidc_issuer,
        signing_keys=tuple(signing_keys),
        protocol=protocol,
        use_refresh_token=settings.oidc_use_refresh_token,
        end_session_endpoint=settings.oidc_end_session_endpoint,
        claims=tuple(ClaimDefinition(name=name) for name in settings.claim_names),
        scopes=tuple(settings.scope_names),
        routes=OAuth2Routes.with_prefix(settings.oauth2_path_prefix),
        pkce_enabled=settings.oidc_pkce_enabled,
    )


def get_provider_configuration() -> ProviderConfiguration:
    """Get the current configuration snapshot

    Returns:
        ProviderConfiguration instance

    Raises:
        RuntimeError: If the registry has not been initialized
    """
    snapshot = _provider_configuration
    if snapshot is None:
        raise RuntimeError(
            "Provider configuration not initialized. Call initialize_provider_configuration() first."
        )
    return snapshot


def initialize_provider_configuration(config: ProviderConfiguration) -> ProviderConfiguration:
    """Install a configuration snapshot

    Args:
        config: Snapshot to serve

    Returns:
        The installed snapshot
    """
    global _provider_configuration

    with _lock:
        _provider_configuration = config

    logger.info(
        f"Provider configuration initialized (issuer={config.issuer}, "
        f"keys={[key.kid for key in config.signing_keys]}, version={config.version})"
    )
    return config


def reconfigure(**changes) -> ProviderConfiguration:
    """Replace fields of the current snapshot

    Not safe against requests served concurrently unless the host
    serializes reconfiguration with traffic.

    Returns:
        The new snapshot (version incremented)
    """
    global _provider_configuration

    with _lock:
        current = get_provider_configuration()
        updated = current.replace(**changes)
        _provider_configuration = updated

    logger.info(
        f"Provider configuration updated to version {updated.version} "
        f"(changed: {sorted(changes)})"
    )
    return updated


def reset_provider_configuration() -> None:
    """Clear the registry (for testing)."""
    global _provider_configuration
    with _lock:
        _provider_configuration = None
