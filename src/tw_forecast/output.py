"""Persistence of the forecast artifact."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .engine.models import ForecastDocument
from .exceptions import ArtifactWriteError


def render_artifact(document: ForecastDocument) -> str:
    """Compact JSON using the published key names."""
    return document.model_dump_json(by_alias=True)


def write_artifact(document: ForecastDocument, path: Path) -> Path:
    """Write ``document`` to ``path`` atomically; the target is untouched on failure."""
    path = Path(path)
    content = render_artifact(document)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactWriteError(f"Failed writing forecast artifact {path}: {exc}") from exc
    return path
