from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import ValidationError as SchemaValidationError

from chrononote.domain.exceptions import ConfigError
from chrononote.domain.schemas import ConfigFileModel
from chrononote.util import atomic_write_json

logger = logging.getLogger("chrononote.config")

APP_DIR_NAME = "chrononote"
CONFIG_ENV_VAR = "CHRONONOTE_CONFIG"


@dataclass(frozen=True)
class Settings:
    config_file: Path
    buffer_file: Path
    notes_dir: Path


def app_dir() -> Path:
    return Path.home() / ".config" / APP_DIR_NAME


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return app_dir() / "config.json"


def default_settings(config_file: Path) -> Settings:
    base = app_dir()
    return Settings(
        config_file=config_file,
        buffer_file=base / "note.md",
        notes_dir=base / "notes",
    )


def save_settings(settings: Settings) -> None:
    model = ConfigFileModel(buffer_file=str(settings.buffer_file), notes_dir=str(settings.notes_dir))
    atomic_write_json(settings.config_file, model.model_dump())


def load_settings(config_file: Path) -> Settings:
    defaults = default_settings(config_file)
    if not config_file.exists():
        save_settings(defaults)
        logger.info("config_created", extra={"path": str(config_file)})
        return defaults

    try:
        model = ConfigFileModel.model_validate_json(config_file.read_text(encoding="utf-8"))
    except SchemaValidationError as exc:
        raise ConfigError(f"failed to parse config file {config_file}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read config file {config_file}: {exc}") from exc

    return Settings(
        config_file=config_file,
        buffer_file=Path(model.buffer_file).expanduser() if model.buffer_file else defaults.buffer_file,
        notes_dir=Path(model.notes_dir).expanduser() if model.notes_dir else defaults.notes_dir,
    )


def resolve_settings(
    config_file: Path,
    buffer_file: Path | None = None,
    notes_dir: Path | None = None,
) -> Settings:
    """Load the config file and apply command-line overrides.

    Overrides are written back so they stick for later runs.
    """
    settings = load_settings(config_file)
    buffer_file = buffer_file.expanduser() if buffer_file is not None else None
    notes_dir = notes_dir.expanduser() if notes_dir is not None else None
    overrides: dict[str, Path] = {}
    if buffer_file is not None and buffer_file != settings.buffer_file:
        overrides["buffer_file"] = buffer_file
    if notes_dir is not None and notes_dir != settings.notes_dir:
        overrides["notes_dir"] = notes_dir
    if overrides:
        settings = replace(settings, **overrides)
        save_settings(settings)
        logger.info("config_updated", extra={"path": str(config_file), "keys": ",".join(sorted(overrides))})
    logger.info(
        "configuration",
        extra={
            "config_file": str(settings.config_file),
            "buffer_file": str(settings.buffer_file),
            "notes_dir": str(settings.notes_dir),
        },
    )
    return settings


def ensure_buffer_file(settings: Settings) -> None:
    if settings.buffer_file.exists():
        return
    settings.buffer_file.parent.mkdir(parents=True, exist_ok=True)
    settings.buffer_file.touch()
    logger.info("buffer_created", extra={"path": str(settings.buffer_file)})
