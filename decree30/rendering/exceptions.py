class ExportError(Exception):
    """Raised when the export document cannot be built or written."""
