from pydantic_settings import BaseSettings

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    # CORS
    cors_allowed_origins: str = "http://localhost:3000"

    # JWT (tokens are issued by the dashboard's auth service)
    jwt_secret_key: str = "CHANGE_ME"
    jwt_access_token_expire_minutes: int = 15
    jwt_issuer: str = "catalog-tools"

    # Catalog
    default_currency: str = "USD"
    max_variant_combinations: int = 1000

    # Reports
    driver_payment_per_delivery: float = 20.0

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "extra": "ignore"}

    def validate_secrets(self) -> None:
        """Raise if production-critical secrets are still defaults."""
        if self.jwt_secret_key == "CHANGE_ME":
            raise ValueError("jwt_secret_key must be changed from default")
        if len(self.jwt_secret_key) < 32:
            raise ValueError(
                "jwt_secret_key must be at least 32 characters (256 bits) per RFC 7518 Section 3.2"
            )
        if self.max_variant_combinations < 1:
            raise ValueError("max_variant_combinations must be positive")


settings = Settings()
