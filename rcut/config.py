from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RCUT_CONFIG_FILE"

_ALLOWED_ENCODINGS = {"utf-8", "latin-1"}
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class CutSettings:
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    delimiter: str | None = None
    output_separator: str | None = None
    source: str = "internal defaults"


def _config_candidates() -> list[Path]:
    explicit = os.getenv(CONFIG_ENV_VAR)
    candidates: list[Path] = []
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend(
        [
            Path.cwd() / "rcut.toml",
            Path.home() / ".config" / "rcut" / "config.toml",
        ]
    )
    return candidates


def _apply_section(settings: CutSettings, section: dict, source_label: str) -> None:
    if isinstance(section.get("encoding"), str):
        value = section["encoding"].strip().lower()
        if value in _ALLOWED_ENCODINGS:
            settings.encoding = value
        else:
            LOGGER.warning("Ignoring unsupported encoding %r in %s", value, source_label)

    if isinstance(section.get("log_level"), str):
        value = section["log_level"].strip().upper()
        if value in _ALLOWED_LOG_LEVELS:
            settings.log_level = value
        else:
            LOGGER.warning("Ignoring unknown log level %r in %s", value, source_label)

    if isinstance(section.get("delimiter"), str):
        if section["delimiter"]:
            settings.delimiter = section["delimiter"]
        else:
            LOGGER.warning("Ignoring empty delimiter in %s", source_label)

    if isinstance(section.get("output_separator"), str):
        settings.output_separator = section["output_separator"]


def load_settings() -> CutSettings:
    """Load defaults from the first readable settings file.

    Keys may sit at the top level or under an ``[rcut]`` table.
    """
    settings = CutSettings()

    for path in _config_candidates():
        if not path.exists():
            continue
        try:
            with path.open("rb") as handle:
                payload = tomllib.load(handle)
        except (tomllib.TOMLDecodeError, OSError) as error:
            LOGGER.warning("Unable to read settings file %s: %s", path, error)
            continue

        section = payload.get("rcut", payload)
        if not isinstance(section, dict):
            LOGGER.warning("Ignoring malformed [rcut] section in %s", path)
            continue

        settings.source = str(path)
        _apply_section(settings, section, settings.source)
        break

    return settings
