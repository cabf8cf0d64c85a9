"""Discovery Errors

Exception hierarchy for the discovery layer.

Two families exist:
- MissingParameterError: client input error, mapped to HTTP 400 by the API layer
- ConfigurationError: fatal setup problem, raised while the provider
  configuration is built so the service refuses to start
"""


class DiscoveryError(Exception):
    """Base class for all discovery errors"""


class MissingParameterError(DiscoveryError):
    """A required request parameter is absent or empty"""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class ConfigurationError(DiscoveryError):
    """Provider configuration is invalid"""


class UnsupportedKeyTypeError(ConfigurationError):
    """Signing key is not one of the supported key families"""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"Unsupported signing key type: {type(key).__name__}")
