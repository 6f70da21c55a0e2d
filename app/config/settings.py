from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Storage backend: "s3" for deployments, "memory" for local runs and tests
    storage_backend: str = "memory"

    # AWS S3 (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None
    s3_endpoint_url: Optional[str] = None  # S3-compatible stores (minio, localstack)

    # Delegated storage access handed to browser clients
    # STS federation tokens cap out at 36 hours
    sas_validity_hours: int = Field(default=3, ge=1, le=36)

    # Sharing / uploads
    share_url_base: str = "/Scoreboard/game"
    max_history_bytes: int = 512 * 1024

    # App
    app_name: str = "scoreboard"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    api_prefix: str = "/Scoreboard/api"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    upload_rate_limit: str = "6/minute"
    rate_limit_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
