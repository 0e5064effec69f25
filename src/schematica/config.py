"""Runtime configuration for the schematica tools."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="SCHEMATICA_", env_file=".env", extra="ignore")

    app_name: str = "schematica"
    log_level: str = "INFO"
    schematic_directory: str = Field(
        default="schematics",
        description="Directory scanned by the CLI for saved schematics.",
    )
    schematic_extension: str = "msch"
    registry_path: str | None = Field(
        default=None,
        description="JSON document listing the known structure types.",
    )


settings = Settings()
