import logging
import time
from typing import Optional

from album_wallpaper.config import Config
from album_wallpaper.errors import (
    DecodeFailureError,
    FetchFailureError,
    InvalidBlurRadiusError,
    InvalidDimensionError,
    WriteFailureError,
)
from album_wallpaper.logger import Logger
from album_wallpaper.raster import Dimensions, PlacementRectangle, Raster
from album_wallpaper.service.artwork_service import ArtworkService
from album_wallpaper.service.background_service import BackgroundService
from album_wallpaper.service.compositor_service import CompositorService
from album_wallpaper.service.wallpaper_service import WallpaperService


class WallpaperOrchestrator:
    def __init__(
        self,
        artwork: Optional[ArtworkService] = None,
        wallpaper: Optional[WallpaperService] = None,
    ) -> None:
        self._logger = Logger().get_logger()
        self._config = Config().get_config()

        self._artwork = artwork or ArtworkService()
        self._background = BackgroundService()
        self._compositor = CompositorService()
        self._wallpaper = wallpaper or WallpaperService()

        dconf = self._config.get("display", {}) or {}
        self._display = Dimensions(int(dconf.get("width", 2560)), int(dconf.get("height", 1440)))

        bconf = self._config.get("background", {}) or {}
        radius = bconf.get("blur_radius", BackgroundService.DEFAULT_BLUR_RADIUS)
        self._blur_radius: Optional[float] = float(radius) if radius is not None else None
        if self._blur_radius is not None and self._blur_radius <= 0:
            self._logger.error(f"Invalid background.blur_radius={radius}; use null to disable the blur")
            raise InvalidBlurRadiusError(f"background.blur_radius must be positive or null, got {radius}")

        fconf = self._config.get("foreground", {}) or {}
        rect = fconf.get("available_rect") or []
        self._available = (
            PlacementRectangle.of(rect) if rect else PlacementRectangle.display_center(self._display)
        )

        oconf = self._config.get("orchestrator", {}) or {}
        self._debounce_seconds = int(oconf.get("debounce_seconds", 30))

        self._last_art_url: Optional[str] = None
        self._last_update_ts: float = 0.0

    @property
    def display(self) -> Dimensions:
        return self._display

    @property
    def blur_radius(self) -> Optional[float]:
        return self._blur_radius

    @property
    def available(self) -> PlacementRectangle:
        return self._available

    def generate(self, art_url: str) -> Raster:
        art = self._artwork.load(art_url)
        background = self._background.produce_background(art, self._display, self._blur_radius)
        return self._compositor.compose(background, art, self._display, self._available)

    def process(self, art_url: str, force_update: bool = False) -> bool:
        """
        Build the wallpaper for `art_url` and apply it. Falls back to the
        default wallpaper when the art cannot be turned into an image.
        Returns True when the generated wallpaper was applied.
        """
        if not force_update and self._is_debounced(art_url):
            self._logger.debug(f"Skipping repeated art url within {self._debounce_seconds}s: {art_url}")
            return False

        try:
            wallpaper = self.generate(art_url)
            path = self._wallpaper.save(wallpaper)
        except (FetchFailureError, DecodeFailureError, InvalidDimensionError, WriteFailureError) as e:
            self._logger.error(f"Wallpaper generation failed: {e}")
            self._wallpaper.set_default_wallpaper()
            return False

        self._wallpaper.set_wallpaper(path)
        self._last_art_url = art_url
        self._last_update_ts = time.time()
        return True

    def _is_debounced(self, art_url: str) -> bool:
        if self._last_art_url != art_url:
            return False
        return (time.time() - self._last_update_ts) < self._debounce_seconds
