from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def parse_level(value: Union[str, int]) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f'Unknown log level {value!r}')
    return level


def _stream_handlers(root: logging.Logger) -> List[logging.Handler]:
    return [h for h in root.handlers if isinstance(h, logging.StreamHandler) and (not isinstance(h, logging.FileHandler))]


def _file_handler_for(root: logging.Logger, path: Path) -> Optional[logging.FileHandler]:
    target = path.absolute()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == target:
            return handler
    return None


def setup_logging(*, console_level: int=logging.WARNING, file_path: Optional[Union[str, Path]]=None, file_level: int=logging.DEBUG, replace_existing: bool=True) -> None:
    """Route log records to stderr and, optionally, to a trace log file.

    Trace tables are printed on stdout, so the console handler never writes
    there. Calling again with the same ``file_path`` retunes the existing file
    handler instead of opening the file twice.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if replace_existing:
        root.handlers.clear()
    formatter = logging.Formatter(LOG_FORMAT)
    handlers = _stream_handlers(root)
    if not handlers:
        handlers = [logging.StreamHandler(sys.stderr)]
        root.addHandler(handlers[0])
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = _file_handler_for(root, path)
        if file_handler is None:
            file_handler = logging.FileHandler(path, mode='w' if replace_existing else 'a', encoding='utf-8')
            root.addHandler(file_handler)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
    for handler in handlers:
        handler.setLevel(console_level)
        handler.setFormatter(formatter)


__all__ = ['LOG_FORMAT', 'parse_level', 'setup_logging']
