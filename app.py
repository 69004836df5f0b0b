"""Board editor entry point: restore the cached board and open the editor."""
from __future__ import annotations

import os
from pathlib import Path

from core import load_config, load_view_or_example, setup_logging

CONFIG_ENV = "BOARD_EDITOR_CONFIG"


def main():
    config_path = os.environ.get(CONFIG_ENV)
    config = load_config(Path(config_path).expanduser() if config_path else None)
    setup_logging(config.log_level, config.log_file)
    view = load_view_or_example(config.storage)

    # pygame is only needed once there is a window to open
    from apps.editor import main as run_editor

    run_editor(view, config)


if __name__ == "__main__":
    main()
