"""OpenID Connect discovery layer for an OAuth2 authorization server"""

__version__ = "1.0.0"
