"""UTF-8 file access for story text and SAMI documents."""
import os
import tempfile
from pathlib import Path

from smicap.errors import CaptionFileError


def read_text_file(path: Path) -> str:
    """Read *path* as UTF-8. Raises CaptionFileError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CaptionFileError(path, str(e)) from e


def write_document(path: Path, text: str) -> None:
    """Atomically write *text* to *path* as UTF-8 using tempfile + os.replace().

    The temp file is created next to the destination so os.replace() stays on
    one filesystem; readers see either the old document or the new one.
    """
    data = text.encode("utf-8")
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as e:
        raise CaptionFileError(path, str(e)) from e
