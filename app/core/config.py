"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MinIO / S3
    S3_ENDPOINT: str = "http://minio:9000"
    S3_ACCESS_KEY: str = "minioadmin"
    S3_SECRET_KEY: str = "minioadmin"
    S3_BUCKET: str = "ipfs"
    S3_USE_SSL: bool = False
    S3_REGION: str | None = None

    # "minio" or "memory"
    STORAGE_BACKEND: str = "minio"

    # Application
    APP_NAME: str = "seapin ipfs gateway"
    LISTEN_ADDR: str = ":8080"
    LOG_LEVEL: str = "INFO"
    MAX_UPLOAD_SIZE_MB: int = 0  # 0 disables the limit
    STREAM_CHUNK_SIZE: int = 64 * 1024

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def max_upload_bytes(self) -> int | None:
        if self.MAX_UPLOAD_SIZE_MB <= 0:
            return None
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


def parse_listen_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port`` (host optional) into a uvicorn host and port."""
    host, sep, port = addr.rpartition(":")
    if not sep:
        host, port = "", addr
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid listen address {addr!r}") from None
    return host.strip("[]") or "0.0.0.0", port_number


# Global settings instance
settings = Settings()
