"""
Configuration for innertext.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/innertext/config.toml) if exists
3. Environment variables (INNERTEXT_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class ParseConfig:
    """How markup is turned into a tree."""
    parser: str = "html.parser"  # any BeautifulSoup tree builder: lxml, html5lib, ...


@dataclass
class StyleConfig:
    """Where display values come from."""
    inline_styles: bool = False  # honour style="display: ..." instead of the default table only


@dataclass
class OutputConfig:
    trailing_newline: bool = True


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class Config:
    """Root config with all settings."""
    parse: ParseConfig = field(default_factory=ParseConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "innertext" / "config.toml"
    return Path.home() / ".config" / "innertext" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "parse" in data:
        p = data["parse"]
        if "parser" in p:
            config.parse.parser = str(p["parser"])

    if "style" in data:
        s = data["style"]
        if "inline_styles" in s:
            config.style.inline_styles = _as_bool(s["inline_styles"])

    if "output" in data:
        o = data["output"]
        if "trailing_newline" in o:
            config.output.trailing_newline = _as_bool(o["trailing_newline"])

    if "log" in data:
        lg = data["log"]
        if "level" in lg:
            config.log.level = str(lg["level"]).upper()

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "INNERTEXT_PARSER": ("parse", "parser", str),
        "INNERTEXT_INLINE_STYLES": ("style", "inline_styles", bool),
        "INNERTEXT_TRAILING_NEWLINE": ("output", "trailing_newline", bool),
        "INNERTEXT_LOG_LEVEL": ("log", "level", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                converted = _as_bool(val) if conv is bool else conv(val)
                if attr == "level":
                    converted = converted.upper()
                setattr(getattr(config, section), attr, converted)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
