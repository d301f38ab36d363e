"""Report file writer.

The report is written to a temporary file beside the target and renamed
into place, so the target path either holds a complete report or is left
as it was.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from toolchain_report.logging_config import get_logger
from toolchain_report.report.exceptions import ReportWriteError

__all__ = ["write_report"]

logger = get_logger(__name__)


def write_report(text: str, path: Path) -> Path:
    """Write the report as UTF-8, replacing any existing file.

    Args:
        text: The rendered report.
        path: Destination file. Parent directories are created.

    Returns:
        The absolute path written.

    Raises:
        ReportWriteError: If the file cannot be written.

    """
    target = Path(path).expanduser().absolute()
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as e:
        raise ReportWriteError(target, str(e)) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info("report_written", path=str(target), size=len(text))
    return target
