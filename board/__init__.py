"""Board model: panels, the flexible field, and the camera transform."""

from .errors import InvariantError
from .panels import PanelKind, Panel, PanelMap, EMPTY_PANEL, PANEL_KIND_COUNT
from .field import Field
from .transform import ViewTransform
from .view import EditorView, PanelSlot
from .fldx import FieldFormatError

__all__ = [
    "InvariantError",
    "PanelKind",
    "Panel",
    "PanelMap",
    "EMPTY_PANEL",
    "PANEL_KIND_COUNT",
    "Field",
    "ViewTransform",
    "EditorView",
    "PanelSlot",
    "FieldFormatError",
]
