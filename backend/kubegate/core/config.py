from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    app_name: str = "kubegate API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Settings
    host: str = "127.0.0.1"
    port: int = 8000

    # Saved cluster list
    data_dir: str = os.path.expanduser("~/.kubegate")
    clusters_file: str = "clusters.json"

    # CORS Settings
    allowed_origins: list = ["*"]
    allowed_methods: list = ["*"]
    allowed_headers: list = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def clusters_path(self) -> str:
        return os.path.join(self.data_dir, self.clusters_file)


settings = Settings()
