from pydantic_settings import BaseSettings


class ServiceSettings(BaseSettings):
    """Service settings loaded from environment."""

    # Service
    service_name: str = "bonus-claims"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"

    # AWS
    table_name: str | None = None  # Set by the compute stack
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = ServiceSettings()
