import copy
import os
from typing import Final, Optional

import yaml

from album_wallpaper.singleton_meta import SingletonMeta


class Config(metaclass=SingletonMeta):
    CONFIG_ENV_VAR: Final[str] = "ALBUM_WALLPAPER_CONFIG"
    DEFAULT_CONFIG_PATH: Final[str] = os.path.join("config", "config.yaml")

    DEFAULTS: Final[dict] = {
        "display": {
            "width": 2560,
            "height": 1440,
        },
        "background": {
            # null disables the blur stage
            "blur_radius": 32,
        },
        "foreground": {
            # x, y, width, height; empty means a zero-sized rectangle at the display midpoint
            "available_rect": [],
        },
        "wallpaper": {
            "output_path": "/tmp/cover-art.png",
            "default_wallpaper": "/usr/share/backgrounds/Alma-mountains-dark.xml",
            "dconf_key": "/org/gnome/desktop/background/picture-uri",
        },
        "artwork": {
            "request_timeout_seconds": 10,
        },
        "orchestrator": {
            "debounce_seconds": 30,
        },
        "log": {
            "level": "INFO",
            "log_file_path": "",
        },
    }

    def __init__(self, config_path: Optional[str] = None) -> None:
        self._config_path = (
            config_path
            or os.environ.get(Config.CONFIG_ENV_VAR)
            or Config.DEFAULT_CONFIG_PATH
        )
        self._config: dict = Config._load(self._config_path)

    def get_config(self) -> dict:
        return self._config

    def get_config_path(self) -> str:
        return self._config_path

    @staticmethod
    def _load(path: str) -> dict:
        merged = copy.deepcopy(Config.DEFAULTS)
        if not os.path.exists(path):
            return merged
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to read config file '{path}'.") from e
        if not isinstance(data, dict):
            raise RuntimeError(f"Config file '{path}' must contain a mapping at the top level.")
        return Config._merge(merged, data)

    @staticmethod
    def _merge(base: dict, override: dict) -> dict:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                Config._merge(base[key], value)
            else:
                base[key] = value
        return base
