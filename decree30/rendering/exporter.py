import os
import tempfile
from pathlib import Path

from decree30.correction.models import StructuredDocument
from decree30.logging.logger import Log
from decree30.rendering.docx_renderer import EXPORT_FAILED, EXPORT_FILENAME, render_docx
from decree30.rendering.exceptions import ExportError


def write_atomic(data: bytes, path: Path) -> Path:
    """Write ``data`` to ``path`` through a temporary file in the same directory.

    Raises:
        ExportError: if the file cannot be written; ``path`` is left untouched.
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        Log.error(f"Failed to write {path}: {exc}")
        raise ExportError(EXPORT_FAILED) from exc
    return path


def export_docx(document: StructuredDocument, output_dir: Path) -> Path:
    """Render the export document and save it as ``EXPORT_FILENAME`` in ``output_dir``.

    The document is fully built in memory before anything touches the disk.
    """
    data = render_docx(document)
    path = write_atomic(data, output_dir / EXPORT_FILENAME)
    Log.info(f"Saved export to {path}")
    return path
