from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from .errors import ConfigError
from .paths import config_path
from .render.formatting import DEFAULT_STYLES
logger = logging.getLogger(__name__)


@dataclass
class TraceConfig:
    bytes_per_line: int = 8
    skip_identical: bool = True
    console_width: Optional[int] = None
    color: bool = True
    styles: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_STYLES))

    def __post_init__(self) -> None:
        if not isinstance(self.bytes_per_line, int) or isinstance(self.bytes_per_line, bool) or self.bytes_per_line <= 0:
            raise ConfigError(f'bytes_per_line must be a positive integer, got {self.bytes_per_line!r}')
        if self.console_width is not None and (not isinstance(self.console_width, int) or self.console_width <= 0):
            raise ConfigError(f'console_width must be a positive integer, got {self.console_width!r}')

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> 'TraceConfig':
        raw = raw or {}
        if not isinstance(raw, dict):
            raise ConfigError(f'config must be a mapping, got {type(raw).__name__}')
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known:
                logger.warning('Ignoring unknown config key %r', key)
                continue
            kwargs[key] = value
        styles = kwargs.pop('styles', None) or {}
        if not isinstance(styles, dict):
            raise ConfigError('styles must be a mapping of role to rich style')
        merged = dict(DEFAULT_STYLES)
        merged.update({str(k): str(v) for k, v in styles.items()})
        for key in ('skip_identical', 'color'):
            if key in kwargs:
                kwargs[key] = bool(kwargs[key])
        return cls(styles=merged, **kwargs)


def load_config(path: Optional[Path]=None) -> TraceConfig:
    path = Path(path) if path else config_path()
    if not path.exists():
        logger.debug('No config at %s, using defaults', path)
        return TraceConfig()
    try:
        with path.open('r', encoding='utf-8') as handle:
            payload = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f'Cannot load config {path}: {e}') from e
    if isinstance(payload, dict) and isinstance(payload.get('fieldtrace'), dict):
        payload = payload['fieldtrace']
    config = TraceConfig.from_raw(payload)
    logger.debug('Loaded config from %s: %s', path, config)
    return config


__all__ = ['TraceConfig', 'load_config']
