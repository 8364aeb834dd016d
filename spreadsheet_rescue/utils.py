import os
import time
from functools import wraps
from pathlib import Path
from typing import Optional, Union

import pendulum
import structlog

from spreadsheet_rescue.exception.base import BaseFileError

logger = structlog.getLogger(__name__)

_FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def retry(attempts: int = 3, delay: float = 0.25, backoff: float = 2.0):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            wait = delay
            for i in range(attempts):
                try:
                    return fn(*args, **kwargs)
                except Exception as e:
                    # Don't retry file-specific errors
                    if isinstance(e, BaseFileError):
                        raise e

                    if i == attempts - 1:
                        raise e
                    logger.warning(
                        f"Retrying {fn.__name__} (attempt {i + 2}/{attempts}) after {type(e).__name__}: {e}"
                    )
                    time.sleep(wait)
                    wait *= backoff

        return wrapper

    return decorator


def get_error_location(exception: Exception) -> Optional[str]:
    if not exception.__traceback__:
        return None

    tb = exception.__traceback__
    while tb.tb_next:
        tb = tb.tb_next
    frame = tb.tb_frame
    filename = os.path.basename(frame.f_code.co_filename)
    return f"{filename}:{tb.tb_lineno}"


def get_file_name(file_path: Union[Path, str]) -> str:
    """Extract filename from Path object or path string."""
    if isinstance(file_path, str):
        return file_path.replace("\\", "/").split("/")[-1]
    return file_path.name


def get_file_extension(file_path: Union[Path, str]) -> str:
    """Get the lower-cased last suffix of a file name, e.g. '.xlsx'."""
    return Path(get_file_name(file_path)).suffix.lower()


def generate_timestamp(now: Optional[pendulum.DateTime] = None) -> str:
    """Filesystem-safe UTC timestamp: '2024-05-01T10-20-30'."""
    now = now or pendulum.now("UTC")
    return now.in_timezone("UTC").format("YYYY-MM-DD[T]HH-mm-ss")


def build_file_name(
    purpose: str, extension: str, now: Optional[pendulum.DateTime] = None
) -> str:
    return f"{purpose}_{generate_timestamp(now)}.{extension.lstrip('.')}"


def readable_file_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return "0 Bytes"

    i = 0
    while size_bytes >= 1024 ** (i + 1) and i < len(_FILE_SIZE_UNITS) - 1:
        i += 1
    value = round(size_bytes / 1024**i, 2)
    return f"{value:g} {_FILE_SIZE_UNITS[i]}"
