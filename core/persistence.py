"""Save and restore the editor view as a small JSON document."""
from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from board import EditorView, FieldFormatError, InvariantError, PanelKind, ViewTransform
from board import fldx

logger = logging.getLogger(__name__)

FORMAT_TAG = "board-editor/1"


class StorageError(ValueError):
    """Raised when a stored view cannot be decoded."""


def view_to_dict(view: EditorView) -> Dict[str, object]:
    return {
        "format": FORMAT_TAG,
        "view": view.transform.coefficients(),
        "field": base64.b64encode(fldx.encode_bytes(view.field)).decode("ascii"),
        "selected": view.selected.ordinal,
    }


def view_from_dict(data: object) -> EditorView:
    if not isinstance(data, dict):
        raise StorageError(f"stored view must be an object, got {type(data).__name__}")
    if data.get("format") != FORMAT_TAG:
        raise StorageError(f"unsupported storage format {data.get('format')!r}")
    try:
        transform = ViewTransform.from_coefficients(data["view"])
        if not transform.is_axis_aligned():
            raise ValueError(f"not a pan/zoom transform: {transform.coefficients()}")
        transform.inverse()
        raw = base64.b64decode(data["field"], validate=True)
        field = fldx.decode_bytes(raw)
        selected = PanelKind.from_ordinal(int(data["selected"]))
    except KeyError as exc:
        raise StorageError(f"stored view missing '{exc.args[0]}'") from exc
    except (TypeError, ValueError, binascii.Error, InvariantError) as exc:
        # FieldFormatError is a ValueError
        raise StorageError(f"stored view is corrupt: {exc}") from exc
    return EditorView(transform=transform, field=field, selected=selected)


def save_view(path: Path, view: EditorView) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(view_to_dict(view), f, indent=2)
    logger.info("Saved %sx%s field to %s", view.field.width, view.field.height, path)


def load_view(path: Path) -> EditorView:
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageError(f"{path} is not valid JSON: {exc}") from exc
    view = view_from_dict(data)
    logger.info("Loaded %sx%s field from %s", view.field.width, view.field.height, path)
    return view


def load_view_or_example(path: Optional[Path]) -> EditorView:
    """Load the cached view, substituting the example board when that fails."""
    if path is None:
        return EditorView.new_example()
    try:
        return load_view(path)
    except FileNotFoundError:
        logger.info("No cached field at %s; starting from the example board", path)
    except (OSError, StorageError, FieldFormatError) as exc:
        logger.warning("Could not restore cached field (%s); starting from the example board", exc)
    return EditorView.new_example()


__all__ = [
    "StorageError",
    "view_to_dict",
    "view_from_dict",
    "save_view",
    "load_view",
    "load_view_or_example",
]
