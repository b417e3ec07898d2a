#!/usr/bin/env python3
# chan_tui/config.py
"""
Config loader/saver and defaults for the chan TUI.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from chan_tui.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/chan_tui/chan_tui.json or OS-specific
    api = cfg["network"]["api_base"]
    cfg["image"]["render_mode"] = "grayscale"
    cfg.save()
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from chan_tui.rendering.pixels import RenderMode, ScaleAlgorithm

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "app": {
        "title": "chan tui",
    },
    "boards": {
        "show_nsfw": False,
    },
    "image": {
        "render_mode": "color",           # color | grayscale | gui
        "scale_mode": "linear",           # fast_nearest | nearest | linear | cubic | gaussian | lanczos
        "thumb_cols": 20,                 # cell budget for thread thumbnails
        "thumb_rows": 10,
    },
    "network": {
        "api_base": "https://a.4cdn.org",
        "image_base": "https://i.4cdn.org",
        "user_agent": "chan-tui/0.3 (+https://example.invalid)",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
        "pool_size": 8,
    },
    "watch": {
        "file": None,                     # watch list path or None
        "poll_interval_s": 20.0,          # pause between full passes
        "request_gap_s": 1.0,             # pause between threads; keeps the API unspammed
    },
    "ui": {
        "theme": "auto",                  # auto | light | dark
    },
    "logging": {
        "level": "INFO",
        "http_debug": False,
        "file": None,                     # auto if None: chantui.log in the cache dir
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "ChanTui")
    # macOS: ~/Library/Application Support/ChanTui
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "ChanTui")
    # Linux and others: ~/.config/chan_tui
    return os.path.join(os.path.expanduser("~/.config"), "chan_tui")

def _os_cache_home() -> str:
    """Return per-OS cache base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
        return os.path.join(base, "ChanTui", "Cache")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Caches"), "ChanTui")
    return os.path.join(os.path.expanduser("~/.cache"), "chan_tui")

def _default_config_path() -> str:
    """Resolve default config path, honoring CHAN_TUI_CONFIG env override."""
    env = os.environ.get("CHAN_TUI_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "chan_tui.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        # Clean temp on error
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if minmax:
        lo, hi = minmax
        x = min(max(x, lo), hi)
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        x = min(max(x, lo), hi)
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _coerce_choice(v: Any, choices, default: str) -> str:
    return v if v in choices else default

# ----------------------------
# Validation
# ----------------------------

_RENDER_MODES = tuple(m.value for m in RenderMode)
_SCALE_MODES = tuple(s.value for s in ScaleAlgorithm)

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(cfg or {}))
    d = DEFAULT_CONFIG

    # app
    c["app"]["title"] = str(c["app"].get("title") or d["app"]["title"])

    # boards
    c["boards"]["show_nsfw"] = _coerce_bool(c["boards"].get("show_nsfw"), d["boards"]["show_nsfw"])

    # image
    im = c["image"]
    im["render_mode"] = _coerce_choice(im.get("render_mode"), _RENDER_MODES, d["image"]["render_mode"])
    im["scale_mode"] = _coerce_choice(im.get("scale_mode"), _SCALE_MODES, d["image"]["scale_mode"])
    im["thumb_cols"] = _coerce_int(im.get("thumb_cols"), d["image"]["thumb_cols"], (1, 200))
    im["thumb_rows"] = _coerce_int(im.get("thumb_rows"), d["image"]["thumb_rows"], (1, 100))

    # network
    n = c["network"]
    n["api_base"]   = str(n.get("api_base") or d["network"]["api_base"]).rstrip("/")
    n["image_base"] = str(n.get("image_base") or d["network"]["image_base"]).rstrip("/")
    n["user_agent"] = str(n.get("user_agent") or d["network"]["user_agent"])
    n["connect_timeout_s"] = _coerce_num(n.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    n["read_timeout_s"]    = _coerce_num(n.get("read_timeout_s"), 15.0, (0.5, 120.0))
    n["retries"]           = _coerce_int(n.get("retries"), 3, (0, 10))
    n["pool_size"]         = _coerce_int(n.get("pool_size"), 8, (1, 64))

    # watch
    w = c["watch"]
    wf = w.get("file")
    w["file"] = os.path.expanduser(str(wf)) if wf else None
    w["poll_interval_s"] = _coerce_num(w.get("poll_interval_s"), 20.0, (1.0, 3600.0))
    w["request_gap_s"]   = _coerce_num(w.get("request_gap_s"), 1.0, (0.0, 60.0))

    # ui
    c["ui"]["theme"] = _coerce_choice(c["ui"].get("theme"), ("auto", "light", "dark"), d["ui"]["theme"])

    # logging
    lg = c["logging"]
    if lg.get("level") not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        lg["level"] = d["logging"]["level"]
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), d["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else os.path.join(_os_cache_home(), "chantui.log")
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), d["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), d["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate(DEFAULT_CONFIG))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = True) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError):
            # Corrupt file. Backup and regenerate.
            backup = cfg_path + ".corrupt.bak"
            log.warning("Config %s unreadable; backed up to %s", cfg_path, backup)
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                pass
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def render_mode(self) -> RenderMode:
        return RenderMode(self.data["image"]["render_mode"])

    @property
    def scale_mode(self) -> ScaleAlgorithm:
        return ScaleAlgorithm(self.data["image"]["scale_mode"])

    @property
    def show_nsfw(self) -> bool:
        return bool(self.data["boards"]["show_nsfw"])


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "_default_config_path",
]
