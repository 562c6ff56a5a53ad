import logging
import os
import subprocess
from typing import Optional

from album_wallpaper.config import Config
from album_wallpaper.errors import WallpaperSetFailureError, WriteFailureError
from album_wallpaper.image_processing_utils import ImageProcessingUtils
from album_wallpaper.logger import Logger
from album_wallpaper.raster import Raster


class WallpaperService:
    """
    Writes the generated wallpaper to disk and points the GNOME background
    setting at it through dconf.
    """

    def __init__(self) -> None:
        self._logger: logging.Logger = Logger().get_logger()
        self._config: dict = Config().get_config()

        wcfg = self._config.get("wallpaper", {}) or {}
        self._output_path: str = wcfg.get("output_path") or "/tmp/cover-art.png"
        self._default_wallpaper: Optional[str] = wcfg.get("default_wallpaper") or None
        self._dconf_key: str = wcfg.get("dconf_key") or "/org/gnome/desktop/background/picture-uri"

    @property
    def output_path(self) -> str:
        return self._output_path

    def save(self, raster: Raster, path: Optional[str] = None) -> str:
        path = path or self._output_path
        try:
            directory = os.path.dirname(os.path.abspath(path))
            os.makedirs(directory, exist_ok=True)
            ImageProcessingUtils.to_pil(raster).save(path, format="PNG")
        except OSError as e:
            self._logger.error(f"Failed to save wallpaper to {path}: {e}")
            raise WriteFailureError(f"Failed to save wallpaper to {path}.") from e
        self._logger.debug(f"Saved {raster.width}x{raster.height} wallpaper to {path}")
        return path

    def set_wallpaper(self, path: Optional[str] = None) -> None:
        uri = WallpaperService.file_uri(path or self._output_path)
        self._write_dconf_string(self._dconf_key, uri)
        self._logger.info("Wallpaper set")

    def set_default_wallpaper(self) -> None:
        if not self._default_wallpaper:
            self._logger.warning("No default wallpaper configured; leaving background unchanged.")
            return
        self.set_wallpaper(self._default_wallpaper)

    @staticmethod
    def file_uri(path: str) -> str:
        return f"file://{os.path.abspath(path)}"

    def _write_dconf_string(self, key: str, value: str) -> None:
        # dconf expects a GVariant literal; strings are single-quoted
        gvariant = "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
        try:
            subprocess.run(
                ["dconf", "write", key, gvariant],
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            self._logger.error("dconf executable not found; cannot set wallpaper.")
            raise WallpaperSetFailureError("dconf executable not found.") from e
        except subprocess.CalledProcessError as e:
            self._logger.error(f"dconf write {key} failed: {(e.stderr or '').strip()}")
            raise WallpaperSetFailureError(f"dconf write {key} failed.") from e
