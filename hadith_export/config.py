"""Configuration loader for the Hadith Export application."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Hadith Export"
    version: str = "1.0.0"


class StorageConfig(BaseModel):
    """Source database and output locations."""

    sqlite_path: str = "./db/hadith.db"
    output_dir: str = "./output"


class ExportConfig(BaseModel):
    """Export pipeline behaviour."""

    # "archive": one ZIP per book, "directory": uncompressed mirror, "both"
    layout: Literal["archive", "directory", "both"] = "archive"
    failure_mode: Literal["fail_fast", "best_effort"] = "fail_fast"
    manifest_name: str = "books.json"
    archive_name: str = "book_{book_id}.zip"
    json_indent: int | None = 2


class LoggingConfig(BaseModel):
    """Logging setup applied by the entry point."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance. Missing sections and a missing
        file both fall back to defaults.
    """
    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    return AppConfig(**yaml_data)
