"""Editor framework services (config, persistence, logging)."""

from .config import (  # noqa: F401
    EditorConfig,
    load_config,
    load_json,
    save_json,
)
from .persistence import (  # noqa: F401
    StorageError,
    save_view,
    load_view,
    load_view_or_example,
    view_to_dict,
    view_from_dict,
)
from .logging_config import setup_logging  # noqa: F401
