"""Saving and restoring the editor view, including the example fallback."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

BASE = Path(__file__).resolve().parents[1]
if str(BASE) not in sys.path:
    sys.path.insert(0, str(BASE))

from board import EditorView, PanelKind, ViewTransform  # noqa: E402
from core.persistence import (  # noqa: E402
    StorageError,
    load_view,
    load_view_or_example,
    save_view,
    view_from_dict,
    view_to_dict,
)


def _edited_view() -> EditorView:
    view = EditorView.new_example()
    view.pan((0.1, 1.0 / 3.0))
    view.scale(0.7, (123.4, 56.7))
    view.flex_mut((-300.0, 900.0)).kind = PanelKind.WARP_MOVE_2X
    view.selected = PanelKind.ICE
    return view


def test_view_round_trip(tmp_path: Path) -> None:
    view = _edited_view()
    path = tmp_path / "cached_field.json"
    save_view(path, view)
    loaded = load_view(path)
    assert loaded.transform == view.transform
    assert loaded.transform.coefficients() == view.transform.coefficients()
    assert loaded.field == view.field
    assert loaded.selected is PanelKind.ICE


def test_container_is_plain_json(tmp_path: Path) -> None:
    path = tmp_path / "view.json"
    save_view(path, EditorView.new_example())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["format"] == "board-editor/1"
    assert len(data["view"]) == 9
    assert data["selected"] == PanelKind.NEUTRAL.ordinal
    assert isinstance(data["field"], str)


def test_missing_keys_and_garbage_are_storage_errors() -> None:
    good = view_to_dict(EditorView.new_example())
    for key in ("view", "field", "selected"):
        broken = dict(good)
        del broken[key]
        with pytest.raises(StorageError):
            view_from_dict(broken)
    with pytest.raises(StorageError):
        view_from_dict(dict(good, field="not base64!!"))
    with pytest.raises(StorageError):
        view_from_dict(dict(good, selected=99))
    with pytest.raises(StorageError):
        view_from_dict(dict(good, format="other"))
    with pytest.raises(StorageError):
        view_from_dict([1, 2, 3])


def test_degenerate_stored_transform_is_rejected() -> None:
    data = view_to_dict(EditorView.new_example())
    data["view"] = ViewTransform.scaling(0.0).coefficients()
    with pytest.raises(StorageError):
        view_from_dict(data)


def test_sheared_or_projective_stored_transform_is_rejected() -> None:
    data = view_to_dict(EditorView.new_example())
    data["view"] = [128.0, 50.0, 0.0, 0.0, 128.0, 0.0, 0.0, 0.0, 1.0]
    with pytest.raises(StorageError):
        view_from_dict(data)
    data["view"] = [128.0, 0.0, 0.0, 0.0, 128.0, 0.0, 0.0, 0.5, 1.0]
    with pytest.raises(StorageError):
        view_from_dict(data)


def test_sheared_file_falls_back_to_example(tmp_path: Path) -> None:
    path = tmp_path / "cached_field.json"
    data = view_to_dict(EditorView.new_example())
    data["view"] = [128.0, 50.0, 0.0, 0.0, 128.0, 0.0, 0.0, 0.0, 1.0]
    path.write_text(json.dumps(data), encoding="utf-8")
    view = load_view_or_example(path)
    assert view.transform == ViewTransform.scaling(EditorView.INITIAL_ZOOM)


def test_missing_file_falls_back_to_example(tmp_path: Path) -> None:
    view = load_view_or_example(tmp_path / "absent.json")
    assert view.field == EditorView.new_example().field


def test_corrupt_file_falls_back_with_warning(tmp_path: Path, caplog) -> None:
    path = tmp_path / "cached_field.json"
    path.write_text("{ this is not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="core.persistence"):
        view = load_view_or_example(path)
    assert view.field.size == (6, 6)
    assert any("example board" in rec.getMessage() for rec in caplog.records)


def test_undecodable_bytes_fall_back_to_example(tmp_path: Path) -> None:
    path = tmp_path / "cached_field.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(StorageError):
        load_view(path)
    assert load_view_or_example(path).field.size == (6, 6)


def test_no_storage_path_gives_example() -> None:
    assert load_view_or_example(None).field.size == (6, 6)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-q"]))
