"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.snapshot_parser.models import DumpFormat


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    log_level: str = "INFO"

    # Exclusion rule for header-block dumps
    excluded_package_prefix: str = "org.cytoscape"
    unversioned_sentinel: str = "0.0.0"

    # Dump layouts assumed by the command line when none is given
    default_old_format: DumpFormat = DumpFormat.HEADER_BLOCK
    default_new_format: DumpFormat = DumpFormat.HEADER_BLOCK

    # cyjdeps lookup script used in generated commands
    cyjdeps_script: str = "find_package.py"


settings = Settings()
