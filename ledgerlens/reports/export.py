"""Writing rendered statements to disk."""

import logging
import os
import tempfile
from pathlib import Path

from ledgerlens.exceptions import ExportError
from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import Renderer
from ledgerlens.reports.json_payload import JsonRenderer
from ledgerlens.reports.pdf import PdfRenderer
from ledgerlens.reports.rows import export_filename
from ledgerlens.reports.spreadsheet import SpreadsheetRenderer
from ledgerlens.reports.text import TextRenderer

logger = logging.getLogger(__name__)

FILE_RENDERERS: dict[str, type[Renderer]] = {
    "txt": TextRenderer,
    "pdf": PdfRenderer,
    "xlsx": SpreadsheetRenderer,
    "json": JsonRenderer,
}


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def get_renderer(fmt: str, currency: str = "EUR") -> Renderer:
    try:
        renderer_cls = FILE_RENDERERS[fmt.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown export format '{fmt}'. Choose from: {', '.join(FILE_RENDERERS)}"
        ) from None
    return renderer_cls(currency=currency)


def export_statement(
    statement: Statement,
    fmt: str,
    output_dir: Path,
    currency: str = "EUR",
) -> Path:
    """Render *statement* and write it to *output_dir*.

    The file is written to a temporary name in the same directory and then
    renamed into place, so a failed export never leaves a partial file or
    clobbers an earlier one.

    Returns:
        Path of the written file.

    Raises:
        ExportError: Rendering or writing failed.
    """
    renderer = get_renderer(fmt, currency)
    target = output_dir / export_filename(statement.kind, statement.as_of, renderer.extension)

    try:
        content = renderer.render(statement)
    except Exception as exc:
        raise ExportError(str(target), f"rendering failed: {exc}") from exc

    tmp_name = None
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=output_dir, prefix=f".{target.name}.", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        # Temporary files are created 0600; exports get the usual umask-based mode.
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(str(target), str(exc)) from exc

    logger.info("Exported %s to %s", statement.kind.value, target)
    return target
