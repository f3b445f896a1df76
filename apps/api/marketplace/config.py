from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "marketplace-jwt-secret"
MIN_SECRET_LENGTH = 32
MEBIBYTE = 1024 * 1024


class Settings(BaseSettings):
    app_name: str = "Marketplace API"
    api_prefix: str = "/api/v1"

    database_url: str = Field(
        default="sqlite+pysqlite:///./marketplace.db",
        validation_alias="MARKETPLACE_DATABASE_URL",
    )
    cors_allowed_origins: str = "http://localhost:3000,http://localhost:5173"
    ws_cors_origin: str = "http://localhost:3000"

    jwt_secret: str = DEFAULT_JWT_SECRET
    allowed_roles: str = "BUYER,SELLER,ADMIN,SUPER_ADMIN"
    admin_roles: str = "ADMIN,SUPER_ADMIN"
    testing: bool = Field(default=False, validation_alias="MARKETPLACE_TESTING")

    object_store_endpoint: str = ""
    object_store_bucket: str = ""
    object_store_prefix: str = "uploads"
    object_store_timeout_s: float = 10.0
    object_store_max_retries: int = 2
    object_store_backoff_s: float = 0.2

    upload_max_file_size_bytes: int = 10 * MEBIBYTE
    upload_max_files: int = 5

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @field_validator("object_store_prefix")
    @classmethod
    def strip_prefix_slashes(cls, value: str) -> str:
        return value.strip().strip("/")


settings = Settings()


def allowed_origins() -> list[str]:
    return [origin.strip() for origin in settings.cors_allowed_origins.split(",") if origin.strip()]


def allowed_roles_list() -> list[str]:
    return [value.strip() for value in settings.allowed_roles.split(",") if value.strip()]


def admin_roles_list() -> list[str]:
    return [value.strip() for value in settings.admin_roles.split(",") if value.strip()]


def websocket_origin_allowed(origin: str | None) -> bool:
    """Browsers always send Origin on websocket upgrades; non-browser clients may omit it."""
    if origin is None:
        return True
    allowed = [value.strip() for value in settings.ws_cors_origin.split(",") if value.strip()]
    return "*" in allowed or origin in allowed


def ensure_secure_runtime_settings() -> None:
    """Fail fast when production-like runtime uses insecure defaults."""
    if settings.testing:
        return
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        raise RuntimeError(
            "JWT_SECRET must be set to a non-default value when MARKETPLACE_TESTING is false"
        )
    if len(settings.jwt_secret) < MIN_SECRET_LENGTH:
        raise RuntimeError(
            "JWT_SECRET must be at least "
            f"{MIN_SECRET_LENGTH} characters when MARKETPLACE_TESTING is false"
        )
    if _is_sqlite_url(settings.database_url):
        raise RuntimeError(
            "MARKETPLACE_DATABASE_URL must use postgres when MARKETPLACE_TESTING is false"
        )
    if not settings.object_store_endpoint.strip() or not settings.object_store_bucket.strip():
        raise RuntimeError(
            "OBJECT_STORE_ENDPOINT and OBJECT_STORE_BUCKET must be set "
            "when MARKETPLACE_TESTING is false"
        )


def _is_sqlite_url(database_url: str) -> bool:
    value = database_url.strip().lower()
    return value.startswith("sqlite")
