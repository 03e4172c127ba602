from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

import tomllib as toml

from numkit.utility import UserInputError

ENV_VAR = "NUMKIT_CONFIG"
DEFAULTS_FILE = "defaults.toml"


class ConfigError(UserInputError):
    pass


@dataclass
class Settings:
    """
    Wrap the merged TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        profile name from [PROFILE] or the file stem
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _load_toml_text(text: str, origin: str) -> dict[str, Any]:
    try:
        return toml.loads(text)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise ConfigError(f"reading {origin}: {msg}{loc}.") from None


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"reading {path.name}: {e.strerror or e}.") from None
    return _load_toml_text(text, path.name)


def _load_defaults() -> dict[str, Any]:
    text = (pkg_files("numkit") / "data" / DEFAULTS_FILE).read_text(encoding="utf-8")
    return _load_toml_text(text, f"package:numkit.data/{DEFAULTS_FILE}")


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def merge_settings(base: dict[str, Any], over: dict[str, Any]) -> dict[str, Any]:
    """Recursive merge; tables merge key by key, everything else is replaced."""
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_settings(out[k], v)
        else:
            out[k] = v
    return out


# --- Public API ------------------------------------------------------------


def config_path_from_env() -> Path | None:
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return None


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load the packaged defaults and merge a user profile over them.

    Resolution: explicit `path`, else $NUMKIT_CONFIG, else defaults only.
    A named file that does not exist is an error, not a silent fallback.
    """
    defaults, name, description = _split_profile_data(_load_defaults(), "default")

    src = Path(path).expanduser() if path is not None else config_path_from_env()
    if src is None:
        return Settings(data=defaults, name=name, description=description)

    if not src.is_file():
        raise ConfigError(f"settings file '{src}' not found.")

    user, name, description = _split_profile_data(_load_toml(src), src.stem)
    return Settings(
        data=merge_settings(defaults, user),
        name=name,
        description=description,
        _source=src,
    )
