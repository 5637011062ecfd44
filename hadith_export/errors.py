"""Error taxonomy for the export pipeline."""

from pathlib import Path


class ExportError(Exception):
    """Base class for every failure raised by the export pipeline."""


class StoreConnectionError(ExportError):
    """The source database could not be opened. Fatal at startup."""


class QueryError(ExportError):
    """A read query failed or returned a row of unexpected shape."""


class SerializationError(ExportError):
    """A book's documents could not be serialized into its archive."""


class FilesystemError(ExportError):
    """A directory or file could not be created or written."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)
