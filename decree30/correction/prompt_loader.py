from pathlib import Path

from decree30.correction.exceptions import CorrectionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the correction instruction template.

    Args:
        path: Path to the template file.
              Defaults to the bundled correction_prompt.txt.

    Returns:
        The raw template string with a ``{json_schema}`` placeholder.

    Raises:
        CorrectionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "correction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CorrectionError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the declared response schema.

    Defaults to the bundled correction_schema.json.

    Raises:
        CorrectionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "correction_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CorrectionError(f"Failed to load JSON schema: {exc}") from exc
