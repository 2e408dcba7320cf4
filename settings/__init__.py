from .provider import (
    DEFAULT_SANDBOX_CLAIM_NAME,
    DEFAULT_SANDBOX_CLAIM_VALUE,
    ConfigProvider,
    EnvConfigProvider,
    StaticConfigProvider,
)

__all__ = [
    "ConfigProvider",
    "DEFAULT_SANDBOX_CLAIM_NAME",
    "DEFAULT_SANDBOX_CLAIM_VALUE",
    "EnvConfigProvider",
    "StaticConfigProvider",
]
