"""Configuration helpers for the export engine."""
from __future__ import annotations

import logging
import logging.config
import os
import platform
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_NAME = "config.yaml"
PACKAGE_DEFAULT_PATH = "defaults/config.yaml"
APP_DIR_NAME = "writeup-export"
ENV_PREFIX = "WRITEUP_EXPORT_"

PAGE_SIZES = {"A4", "LETTER", "LEGAL"}


class PageConfig(BaseModel):
    size: str = "A4"
    margin_mm: float = 20.0

    @field_validator("size")
    @classmethod
    def known_page_size(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in PAGE_SIZES:
            raise ValueError(f"unsupported page size: {value}")
        return normalized

    @field_validator("margin_mm")
    @classmethod
    def positive_margin(cls, value: float) -> float:
        if value < 0:
            raise ValueError("margin_mm must not be negative")
        return value


class FontConfig(BaseModel):
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"


class BrandingConfig(BaseModel):
    attribution: str = "Generated by ModelMix Write-up Agent"
    creator: str = "ModelMix AI"
    generator: str = "ModelMix Write-up Agent"


class DateConfig(BaseModel):
    format: Optional[str] = None


class OutputConfig(BaseModel):
    directory: str = "exports"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    config: Optional[str] = None


class AppConfig(BaseModel):
    page: PageConfig = Field(default_factory=PageConfig)
    fonts: FontConfig = Field(default_factory=FontConfig)
    branding: BrandingConfig = Field(default_factory=BrandingConfig)
    dates: DateConfig = Field(default_factory=DateConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load one YAML file over the package defaults, or the layered config when no path is given."""
    if path is None:
        data, _ = load_layered_config()
        return AppConfig.model_validate(data)
    data = _deep_merge(_load_package_defaults(), _load_yaml(Path(path)))
    return AppConfig.model_validate(data)


@lru_cache(maxsize=1)
def get_cached_config() -> AppConfig:
    return load_config()


def load_layered_config() -> Tuple[Dict[str, Any], List[str]]:
    """Return the effective layered configuration and the sources applied."""
    sources: List[str] = []
    data: Dict[str, Any] = {}

    package_defaults = _load_package_defaults()
    if package_defaults:
        data = package_defaults
        sources.append("package:" + PACKAGE_DEFAULT_PATH)

    for path in _default_overlay_paths():
        overlay = _load_yaml(path)
        if overlay:
            data = _deep_merge(data, overlay)
            sources.append(str(path))

    env_path = os.environ.get(ENV_PREFIX + "CONFIG")
    if env_path:
        overlay = _load_yaml(Path(env_path))
        if overlay:
            data = _deep_merge(data, overlay)
            sources.append(env_path)

    env_overlay = _environment_overrides()
    if env_overlay:
        data = _deep_merge(data, env_overlay)
        sources.append(f"env:{ENV_PREFIX}*")

    return data, sources


def setup_logging(config: AppConfig | None = None) -> None:
    """Apply a YAML dictConfig file when one is configured, else basicConfig."""
    settings = (config or get_cached_config()).logging
    if settings.config:
        log_cfg = Path(settings.config)
        if log_cfg.is_file():
            with log_cfg.open("r", encoding="utf-8") as handle:
                logging.config.dictConfig(yaml.safe_load(handle))
            return
    logging.basicConfig(
        level=getattr(logging, settings.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_package_defaults() -> Dict[str, Any]:
    try:
        resource = resources.files("writeup_export").joinpath(PACKAGE_DEFAULT_PATH)
    except (FileNotFoundError, ModuleNotFoundError):  # pragma: no cover - packaging guard
        return {}
    if not resource.is_file():  # pragma: no cover - packaging guard
        return {}
    with resource.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    return loaded if isinstance(loaded, dict) else {}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    return loaded if isinstance(loaded, dict) else {}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {**base}
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _default_overlay_paths() -> List[Path]:
    paths: List[Path] = []
    system_path = _system_config_path()
    if system_path is not None:
        paths.append(system_path)
    user_path = _user_config_path()
    if user_path is not None:
        paths.append(user_path)
    paths.append(Path.cwd() / DEFAULT_CONFIG_NAME)
    return paths


def _system_config_path() -> Path | None:
    if platform.system().lower().startswith("win"):
        base = Path(os.environ.get("PROGRAMDATA", r"C:\\ProgramData"))
        return base / APP_DIR_NAME / DEFAULT_CONFIG_NAME
    return Path("/etc") / APP_DIR_NAME / DEFAULT_CONFIG_NAME


def _user_config_path() -> Path | None:
    if platform.system().lower().startswith("win"):
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / APP_DIR_NAME / DEFAULT_CONFIG_NAME
    return Path.home() / ".config" / APP_DIR_NAME / DEFAULT_CONFIG_NAME


def _environment_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    env_specs = {
        "PAGE_SIZE": (("page", "size"), str),
        "MARGIN_MM": (("page", "margin_mm"), float),
        "OUTPUT_DIR": (("output", "directory"), str),
        "ATTRIBUTION": (("branding", "attribution"), str),
        "CREATOR": (("branding", "creator"), str),
        "DATE_FORMAT": (("dates", "format"), str),
        "LOG_LEVEL": (("logging", "level"), str),
    }

    for suffix, (path, caster) in env_specs.items():
        env_var = ENV_PREFIX + suffix
        if env_var not in os.environ:
            continue
        raw_value = os.environ[env_var]
        try:
            value = caster(raw_value)
        except (TypeError, ValueError):
            continue
        _set_nested(overrides, path, value)
    return overrides


def _set_nested(target: Dict[str, Any], path: Iterable[str], value: Any) -> None:
    current = target
    keys = list(path)
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value
