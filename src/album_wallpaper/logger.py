import logging
import sys
from logging.handlers import RotatingFileHandler

from album_wallpaper.config import Config
from album_wallpaper.singleton_meta import SingletonMeta


class Logger(metaclass=SingletonMeta):
    def __init__(self) -> None:
        self._logger: logging.Logger = logging.getLogger('album_wallpaper')
        self._config: dict = Config().get_config()

        log_cfg = self._config.get('log', {}) or {}
        level = logging.getLevelName(str(log_cfg.get('level', 'INFO')).upper())
        if not isinstance(level, int):
            level = logging.INFO
        self._logger.setLevel(level)

        # Handlers survive a singleton reset; drop the old ones before re-adding
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        # Stream handler for console logging
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(level)
        stdout_handler.setFormatter(logging.Formatter('%(asctime)s :: %(levelname)s :: %(message)s'))
        self._logger.addHandler(stdout_handler)

        # File handler with rotation (only when a path is configured)
        log_file_path = log_cfg.get('log_file_path')
        if log_file_path:
            file_handler = RotatingFileHandler(log_file_path, maxBytes=1_000_000, backupCount=5)
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter('%(asctime)s :: %(levelname)s :: %(message)s'))
            self._logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        return self._logger
