"""Report renderers."""

from ifbsync.renderers.metadata import MetadataReporter, report_path

__all__ = ["MetadataReporter", "report_path"]
