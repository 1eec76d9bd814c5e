from __future__ import annotations
import os
from pathlib import Path
CONFIG_ENV = 'FIELDTRACE_CONFIG'
USER_CONFIG_DIR = Path(os.getenv('XDG_CONFIG_HOME') or Path.home() / '.config') / 'fieldtrace'
DEFAULT_CONFIG = USER_CONFIG_DIR / 'config.yaml'


def config_path() -> Path:
    override = (os.getenv(CONFIG_ENV) or '').strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG


__all__ = ['CONFIG_ENV', 'USER_CONFIG_DIR', 'DEFAULT_CONFIG', 'config_path']
