"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(data_dir: Path) -> Path:
    """Configure file-based debug logging into the data directory."""
    data_dir.mkdir(parents=True, exist_ok=True)
    log_path = data_dir / 'costcontrol_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s'))
    root = logging.getLogger('costcontrol')
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    root.info('Debug logging started → %s', log_path)
    return log_path
