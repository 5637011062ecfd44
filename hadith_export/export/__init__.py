"""Export pipeline: aggregation, archiving, and the manifest."""

from hadith_export.export.aggregator import HierarchyAggregator
from hadith_export.export.archive import (
    ArchiveBuilder,
    BuiltArchive,
    read_archive,
    write_directory,
)
from hadith_export.export.manifest import ManifestWriter, format_size, write_manifest

__all__ = [
    "ArchiveBuilder",
    "BuiltArchive",
    "HierarchyAggregator",
    "ManifestWriter",
    "format_size",
    "read_archive",
    "write_directory",
    "write_manifest",
]
