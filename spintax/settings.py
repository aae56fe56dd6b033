from dataclasses import dataclass
from typing import Mapping, Optional

import toml

from .error import SettingsError
from .helpers import exception_to_string, json_opt_prop, json_prop
from .history import DEFAULT_HISTORY_SIZE
from .tree.evaluate import MAX_VARIATIONS

SETTINGS_FILENAME = "spintax.toml"


@dataclass
class Settings:
    history_size: int = DEFAULT_HISTORY_SIZE
    max_variations: int = MAX_VARIATIONS
    # Seed for random variants; None picks a fresh one each session.
    seed: Optional[int] = None


def settings_from_dict(obj: Mapping[str, object]) -> Settings:
    settings = Settings(
        history_size=json_prop(obj, "history_size", int, DEFAULT_HISTORY_SIZE),
        max_variations=json_prop(obj, "max_variations", int, MAX_VARIATIONS),
        seed=json_opt_prop(obj, "seed", int),
    )
    if settings.history_size < 1:
        raise ValueError("history_size must be positive")
    if settings.max_variations < 1:
        raise ValueError("max_variations must be positive")
    return settings


def read_settings(
    filename: str = SETTINGS_FILENAME, *, must_exist: bool = False
) -> Settings:
    try:
        with open(filename, encoding="utf-8") as f:
            obj = toml.load(f)
    except FileNotFoundError:
        if must_exist:
            raise SettingsError(f"Settings file {filename} does not exist") from None
        return Settings()
    except toml.TomlDecodeError as e:
        raise SettingsError(
            f"Malformed settings file {filename}: {exception_to_string(e)}"
        ) from e

    try:
        return settings_from_dict(obj)
    except ValueError as e:
        raise SettingsError(f"{filename}: {exception_to_string(e)}") from e
