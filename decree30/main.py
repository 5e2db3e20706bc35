"""Command line entry point: correct one file and write the export + report."""

from pathlib import Path

import typer

from decree30.config.settings import Settings
from decree30.ingestion.models import SourceFile
from decree30.logging.logger import Log
from decree30.processor.processor import build_processor
from decree30.processor.session import Session
from decree30.rendering.exceptions import ExportError
from decree30.rendering.exporter import export_docx, write_atomic
from decree30.rendering.report import REPORT_FILENAME

app = typer.Typer(
    help="Trợ lý soạn thảo văn bản hành chính theo Nghị định 30/2020/NĐ-CP.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)


@app.callback()
def root() -> None:
    """Settings are read from the environment (API_KEY, AI_PROVIDER, ...)."""


@app.command(help="Rà soát một tệp (PDF, DOCX, TXT) và xuất file Word cùng báo cáo.")
def correct(
    file_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Tệp cần rà soát",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Thư mục lưu kết quả (mặc định: OUTPUT_DIR)",
    ),
) -> None:
    settings = Settings()
    Log.configure(settings.log_level)
    target_dir = output_dir if output_dir is not None else Path(settings.output_dir)

    session = Session(build_processor(settings))
    session.select_file(SourceFile.from_path(file_path))
    state = session.submit()
    if state.error is not None:
        typer.echo(state.error, err=True)
        raise typer.Exit(code=1)
    assert state.result is not None

    report = session.report()
    try:
        docx_path = export_docx(state.result.structured_document, target_dir)
        report_path = write_atomic(report.encode("utf-8"), target_dir / REPORT_FILENAME)
    except ExportError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(report)
    typer.echo("")
    typer.echo(f"Đã lưu: {docx_path}")
    typer.echo(f"Đã lưu: {report_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
