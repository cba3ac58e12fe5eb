"""Логування для rcg3d.

Усі модулі беруть логер через get_logger(); кореневий логер процесу не чіпаємо.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter("%(levelname)s %(name)s: %(message)s")
_ROOT = "rcg3d"


def _ensure_root() -> logging.Logger:
    """Логер 'rcg3d' з одним stdout-хендлером, ізольований від root."""
    root = logging.getLogger(_ROOT)
    real = [h for h in root.handlers if not isinstance(h, logging.NullHandler)]
    if not real:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Виставити рівень для всієї родини логерів 'rcg3d'."""
    _ensure_root().setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Логер у просторі імен 'rcg3d'. Без level — NOTSET, тобто рівень успадковується
    від 'rcg3d', налаштованого через configure_logging().
    """
    log = logging.getLogger(name if name.startswith(_ROOT) else f"{_ROOT}.{name}")
    log.setLevel(logging.NOTSET if level is None else _to_level(level))
    return log
