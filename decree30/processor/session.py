"""Holds the single "current result" of the assistant and the submit flow."""

from dataclasses import dataclass

from decree30.correction.exceptions import CorrectionError
from decree30.correction.models import CorrectionResult
from decree30.ingestion.exceptions import IngestionError
from decree30.ingestion.models import SourceFile
from decree30.logging.logger import Log
from decree30.processor.processor import Processor
from decree30.rendering.docx_renderer import render_docx
from decree30.rendering.preview import render_preview_html
from decree30.rendering.report import render_report

NO_FILE_SELECTED = "Vui lòng chọn một tệp để xử lý."
UNKNOWN_ERROR = "Đã có lỗi xảy ra."


@dataclass
class SessionState:
    """What the UI shows. Either ``result`` or ``error`` is set, never both."""

    selected_file: SourceFile | None = None
    is_loading: bool = False
    error: str | None = None
    result: CorrectionResult | None = None


class Session:
    """One user's document flow: select a file, submit it, read the projections.

    Every action replaces the state wholesale; earlier results are discarded.
    """

    def __init__(self, processor: Processor) -> None:
        self._processor = processor
        self.state = SessionState()

    @property
    def can_submit(self) -> bool:
        return self.state.selected_file is not None and not self.state.is_loading

    def select_file(self, source: SourceFile) -> None:
        self.state = SessionState(selected_file=source)
        Log.info(f"Selected {source.name}")

    def clear(self) -> None:
        """Forget the selected file and any result or error."""
        self.state = SessionState()

    def submit(self) -> SessionState:
        """Process the selected file, leaving either a result or an error message."""
        selected = self.state.selected_file
        if selected is None:
            self.state = SessionState(error=NO_FILE_SELECTED)
            return self.state
        if self.state.is_loading:
            Log.warning(f"Submission for {selected.name} already in progress")
            return self.state

        self.state = SessionState(selected_file=selected, is_loading=True)
        try:
            result = self._processor.process(selected)
        except (IngestionError, CorrectionError) as exc:
            Log.error(f"Submission for {selected.name} failed: {exc}")
            self.state = SessionState(selected_file=selected, error=str(exc) or UNKNOWN_ERROR)
        except Exception as exc:
            Log.exception(f"Unexpected failure for {selected.name}")
            self.state = SessionState(selected_file=selected, error=str(exc) or UNKNOWN_ERROR)
        else:
            self.state = SessionState(selected_file=selected, result=result)
        return self.state

    def export_docx(self) -> bytes:
        """Serialized export document for the current result.

        Raises:
            ExportError: if the document cannot be built.
        """
        return render_docx(self._require_result().structured_document)

    def report(self) -> str:
        result = self._require_result()
        return render_report(result.summary, result.corrections)

    def preview_html(self) -> str:
        return render_preview_html(self._require_result().structured_document)

    def _require_result(self) -> CorrectionResult:
        if self.state.result is None:
            raise RuntimeError("No correction result available")
        return self.state.result
