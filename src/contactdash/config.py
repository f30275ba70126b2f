"""Settings for the dashboard client and the reference server.

Precedence: explicit overrides (CLI flags) > CONTACTDASH_* environment
variables > YAML config file > defaults.
"""

import ipaddress
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

ENV_PREFIX = "CONTACTDASH_"
CONFIG_ENV = ENV_PREFIX + "CONFIG"
DEFAULT_PORT = 8080
DEFAULT_ADDRESS = "0.0.0.0"


def _repo_root() -> Path:
    """Return repo root (parent of src)."""
    return Path(__file__).resolve().parent.parent.parent


def load_dotenv_files() -> Path | None:
    """Load .env from repo root or current dir. Returns the file used, if any."""
    for path in (_repo_root() / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            return path
    return None


@dataclass(frozen=True)
class Settings:
    base_url: str = f"http://127.0.0.1:{DEFAULT_PORT}"
    contact_interval: float = 2.0
    time_interval: float = 1.0
    request_timeout: float = 10.0
    address: str = DEFAULT_ADDRESS
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url is required")
        for name in ("contact_interval", "time_interval", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log_level[{self.log_level}]")
        object.__setattr__(self, "log_level", level)


def check_server_settings(settings: Settings) -> Settings:
    """Validate the address and port the server listens on."""
    if settings.port < 1 or settings.port > 65535:
        raise ValueError("port must be between 1 and 65535")
    try:
        ipaddress.ip_address(settings.address)
    except ValueError as e:
        raise ValueError(f"invalid address[{settings.address}]: {e}") from e
    return settings


_FIELD_TYPES = {f.name: f.type for f in fields(Settings)}


def _coerce(name: str, value: Any) -> Any:
    kind = _FIELD_TYPES[name]
    if kind is int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer")
        return int(value)
    if kind is float:
        return float(value)
    return str(value).strip()


def _coerce_all(values: Mapping[str, Any], source: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in values.items():
        if name not in _FIELD_TYPES:
            raise ValueError(f"unknown setting {name!r} in {source}")
        if value is None:
            continue
        try:
            out[name] = _coerce(name, value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid {name} in {source}: {value!r}") from e
    return out


def get_config_path(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the YAML config path from CONTACTDASH_CONFIG, if set."""
    environ = os.environ if environ is None else environ
    path = environ.get(CONFIG_ENV, "").strip()
    if path:
        return Path(path).expanduser().resolve()
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load the YAML config file. An empty file means no settings."""
    path = Path(path).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"could not read config file[{path}]: {e}") from e
    data = yaml.safe_load(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config file[{path}] must be a mapping")
    return _coerce_all(data, str(path))


def env_settings(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    values = {}
    for name in _FIELD_TYPES:
        raw = environ.get(ENV_PREFIX + name.upper(), "").strip()
        if raw:
            values[name] = raw
    return _coerce_all(values, "environment")


def load_settings(
    config_file: Path | str | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge defaults, config file, environment and overrides into Settings."""
    path = Path(config_file) if config_file else get_config_path(environ)
    merged: dict[str, Any] = {}
    if path is not None:
        merged.update(load_config_file(path))
    merged.update(env_settings(environ))
    merged.update(_coerce_all(overrides or {}, "arguments"))
    return replace(Settings(), **merged)
