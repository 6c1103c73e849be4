from signedjwt.api.dependencies import (
    clear_dependency_caches,
    get_token_service,
    http_bearer,
    require_verified_token,
)

__all__ = ["clear_dependency_caches", "get_token_service", "http_bearer", "require_verified_token"]
