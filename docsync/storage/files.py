"""Small filesystem helpers shared by the storage layer."""

import os
import tempfile
from pathlib import Path


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to path so readers never observe a partial file."""
    ensure_dir(path.parent)
    # Temp file lives next to the target so os.replace stays on one filesystem
    with tempfile.NamedTemporaryFile(
        "w", delete=False, encoding="utf-8", dir=path.parent, prefix=".tmp-", suffix=".part"
    ) as tmp:
        tmp.write(text)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    try:
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")
