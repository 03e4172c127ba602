# runtime.py
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from numkit.config import Settings, load_settings, merge_settings


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)

    def apply(self, settings: Settings | dict[str, Any]) -> None:
        if isinstance(settings, Settings):
            self.profile_name = settings.name
            cfg = settings.as_dict()
        else:
            cfg = settings
        self.settings = dict(cfg)

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'SIEVE.MAX_INDEX'."""
        if not key:
            return default
        cur: Any = self.settings
        for part in key.split("."):
            if isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                return default
        return cur


def _nest(dotted: dict[str, Any]) -> dict[str, Any]:
    """{'A.B': 1} -> {'A': {'B': 1}}"""
    out: dict[str, Any] = {}
    for key, value in dotted.items():
        *head, last = key.split(".")
        cur = out
        for part in head:
            cur = cur.setdefault(part, {})
        cur[last] = value
    return out


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("numkit_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        rt.apply(load_settings())
        _current_runtime.set(rt)
    return rt


def APPLY(settings: Settings | dict[str, Any]) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


@contextmanager
def override(values: dict[str, Any]) -> Iterator[Runtime]:
    """
    Temporarily overlay dotted settings, e.g.
    ``with override({"SIEVE.MAX_INDEX": 1000}): ...``
    """
    base = current()
    scoped = Runtime(
        profile_name=base.profile_name,
        settings=merge_settings(base.settings, _nest(values)),
    )
    token = _current_runtime.set(scoped)
    try:
        yield scoped
    finally:
        _current_runtime.reset(token)
