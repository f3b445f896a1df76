from marketplace.integrations.errors import (
    OBJECT_STORE,
    IntegrationError,
    IntegrationRejectedError,
    IntegrationTimeoutError,
    IntegrationUnavailableError,
)

__all__ = [
    "OBJECT_STORE",
    "IntegrationError",
    "IntegrationTimeoutError",
    "IntegrationUnavailableError",
    "IntegrationRejectedError",
]
