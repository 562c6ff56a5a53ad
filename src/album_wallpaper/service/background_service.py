import logging
from dataclasses import dataclass
from typing import Final, Optional, Union

from album_wallpaper.errors import InvalidBlurRadiusError
from album_wallpaper.image_processing_utils import ImageProcessingUtils
from album_wallpaper.logger import Logger
from album_wallpaper.raster import Dimensions, Raster


@dataclass(frozen=True)
class PlainBackground:
    pass


@dataclass(frozen=True)
class BlurredBackground:
    # Blur radius in display-resolution pixels
    radius: float

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise InvalidBlurRadiusError(f"Blur radius must be positive, got {self.radius}")


BackgroundMode = Union[PlainBackground, BlurredBackground]


def background_mode(blur_radius: Optional[float]) -> BackgroundMode:
    if blur_radius is None:
        return PlainBackground()
    return BlurredBackground(float(blur_radius))


class BackgroundService:
    """
    Builds the display-sized background layer from the album art, either as a
    plain crop-and-scale or as a soft downscale-blur-upscale backdrop.
    """

    # Blur runs at 1/DOWNSCALE_FACTOR of the display resolution
    DOWNSCALE_FACTOR: Final[int] = 4
    DEFAULT_BLUR_RADIUS: Final[float] = 32

    def __init__(self, downscale_factor: int = DOWNSCALE_FACTOR) -> None:
        self._logger: logging.Logger = Logger().get_logger()
        if downscale_factor < 1:
            raise ValueError(f"Downscale factor must be at least 1, got {downscale_factor}")
        self._downscale_factor = downscale_factor

    def produce_background(
        self,
        source: Raster,
        display: Dimensions,
        blur_radius: Optional[float] = None,
    ) -> Raster:
        return self.render_background(source, display, background_mode(blur_radius))

    def render_background(self, source: Raster, display: Dimensions, mode: BackgroundMode) -> Raster:
        display = Dimensions.of(display)
        if isinstance(mode, BlurredBackground):
            return self._blurred(source, display, mode.radius)
        if isinstance(mode, PlainBackground):
            return self._plain(source, display)
        raise TypeError(f"Unknown background mode: {mode!r}")

    def _plain(self, source: Raster, display: Dimensions) -> Raster:
        return ImageProcessingUtils.resize(source, display)

    def _blurred(self, source: Raster, display: Dimensions, blur_radius: float) -> Raster:
        scale = self._downscale_factor
        reduced = self.reduced_dimensions(display)
        self._logger.debug(
            "Blurring background at %sx%s (radius %.2f) for %sx%s display",
            reduced.width, reduced.height, blur_radius / scale, display.width, display.height,
        )
        downscaled = ImageProcessingUtils.resize(source, reduced)
        blurred = ImageProcessingUtils.gaussian_blur(downscaled, blur_radius / scale)
        return ImageProcessingUtils.resize(blurred, display)

    def reduced_dimensions(self, display: Dimensions) -> Dimensions:
        """Display size divided by the downscale factor, never below 1x1."""
        scale = self._downscale_factor
        return Dimensions(max(1, display.width // scale), max(1, display.height // scale))
