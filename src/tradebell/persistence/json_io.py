# -*- coding: utf-8 -*-
"""JSON snapshot files written atomically (temp file + fsync + os.replace)."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """Return the parsed file content, or None when the file is missing or empty.

    Raises:
        ValueError: If the file is not valid JSON (json.JSONDecodeError).
        OSError: If the file exists but cannot be read.
    """
    if not path.exists():
        return None
    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return None
    return json.loads(content)


def write_json_atomic(path: Path, data: Any) -> None:
    """Replace path with the JSON encoding of data; readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)
        raise
