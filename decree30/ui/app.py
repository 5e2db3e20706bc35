"""Streamlit UI: upload, correct, preview, download.

Run with ``streamlit run decree30/ui/app.py``.
"""

import streamlit as st

from decree30.config.settings import Settings
from decree30.ingestion.models import DEFAULT_MIME_TYPE, SourceFile
from decree30.logging.logger import Log
from decree30.processor.processor import build_processor
from decree30.processor.session import Session
from decree30.rendering.docx_renderer import EXPORT_FILENAME
from decree30.rendering.exceptions import ExportError
from decree30.rendering.report import REPORT_FILENAME

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _session() -> Session:
    if "session" not in st.session_state:
        settings = Settings()
        Log.configure(settings.log_level)
        st.session_state["session"] = Session(build_processor(settings))
    return st.session_state["session"]


def _on_upload(session: Session) -> None:
    uploaded = st.session_state.get("upload")
    if uploaded is None:
        session.clear()
        return
    session.select_file(
        SourceFile(
            name=uploaded.name,
            mime_type=uploaded.type or DEFAULT_MIME_TYPE,
            size_bytes=uploaded.size,
            read=uploaded.getvalue,
        )
    )


def _render_result(session: Session) -> None:
    result = session.state.result
    if result is None:
        return

    st.subheader("Tóm tắt")
    st.info(result.summary)

    left, right = st.columns(2)
    with left:
        st.subheader("Văn bản đã sửa")
        try:
            st.download_button(
                "Tải về .docx",
                data=session.export_docx(),
                file_name=EXPORT_FILENAME,
                mime=DOCX_MIME_TYPE,
            )
        except ExportError as exc:
            st.error(str(exc))
        with st.container(height=600):
            st.html(session.preview_html())

    with right:
        st.subheader(f"Các lỗi đã sửa ({len(result.corrections)})")
        with st.container(height=600):
            for record in result.corrections:
                with st.container(border=True):
                    st.markdown(f"**{record.section}**")
                    st.markdown(f'Gốc: "{record.original_text}"')
                    st.markdown(f':green[Đã sửa: "{record.corrected_text}"]')
                    st.caption(f"Lý do: {record.reason}")

    st.subheader("Báo cáo rà soát")
    report = session.report()
    # the code block carries a copy-to-clipboard button
    st.code(report, language=None)
    st.download_button(
        "Tải báo cáo .txt",
        data=report.encode("utf-8"),
        file_name=REPORT_FILENAME,
        mime="text/plain",
    )


def main() -> None:
    st.set_page_config(page_title="Trợ lý Soạn thảo NĐ30", layout="wide")
    session = _session()

    st.title("Chuẩn hóa văn bản hành chính")
    st.write(
        "Tải lên văn bản của bạn để tự động kiểm tra chính tả, thể thức và định dạng "
        "lại theo tiêu chuẩn Nghị định 30/2020/NĐ-CP."
    )

    st.file_uploader(
        "Hỗ trợ PDF, DOCX, TXT",
        type=["pdf", "txt", "docx", "doc"],
        key="upload",
        disabled=session.state.is_loading,
        on_change=_on_upload,
        args=(session,),
    )
    selected = session.state.selected_file
    if selected is not None:
        st.caption(f"Tệp đã chọn: {selected.name} ({selected.size_bytes / 1024:.2f} KB)")

    if st.button("Kiểm tra & Sửa lỗi ngay", disabled=not session.can_submit, type="primary"):
        with st.spinner("Đang phân tích và định dạng lại văn bản..."):
            session.submit()

    if session.state.error:
        st.error(session.state.error)
    _render_result(session)


main()
