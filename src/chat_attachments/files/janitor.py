"""Best-effort removal of downloaded temp files."""

import logging
import os
from collections.abc import Iterable

from chat_attachments.exceptions import DeleteFailure
from chat_attachments.files.models import ProcessedFile

logger = logging.getLogger(__name__)


def cleanup(files: Iterable[ProcessedFile]) -> None:
    """Delete the temp file of every processed file.

    Failures (including files already removed) are logged and skipped; the
    remaining files are still attempted and nothing is raised.

    Args:
        files: Processed files from one message-handling turn
    """
    for file in files:
        if not file.temp_path:
            continue
        try:
            _delete(file.temp_path)
        except DeleteFailure as e:
            logger.warning("Failed to cleanup temp file: %s", e)
        else:
            logger.debug("Cleaned up temp file %s", file.temp_path)


def _delete(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        raise DeleteFailure(path, e) from e
