"""Command-line entry point for the Hadith Export application."""

import logging
from pathlib import Path

from hadith_export.config import AppConfig, load_config
from hadith_export.errors import ExportError, FilesystemError
from hadith_export.export import ManifestWriter
from hadith_export.storage import HadithRepository, open_readonly

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    """Apply the configured log level and format to the root logger."""
    logging.basicConfig(
        level=config.logging.level.upper(),
        format=config.logging.format,
    )


def export_all(config: AppConfig) -> int:
    """Run one full export.

    Args:
        config: Loaded application configuration.

    Returns:
        Number of books exported successfully.

    Raises:
        ExportError: On any fatal failure.
    """
    output_dir = Path(config.storage.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Cannot create output directory ({exc})", output_dir) from exc

    conn = open_readonly(config.storage.sqlite_path)
    try:
        writer = ManifestWriter(HadithRepository(conn), output_dir, config.export)
        results = writer.run()
    finally:
        conn.close()
    return sum(1 for r in results if r.status == "exported")


def main(config_path: str | Path = "config.yaml") -> int:
    """Load configuration, export every book, and report an exit status."""
    config = load_config(config_path)
    configure_logging(config)
    logger.info("%s %s starting", config.app.name, config.app.version)

    try:
        exported = export_all(config)
    except ExportError:
        logger.exception("Export failed")
        return 1

    logger.info("Export finished: %d books exported", exported)
    return 0
