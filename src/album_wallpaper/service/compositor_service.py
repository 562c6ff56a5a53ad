import logging
from typing import Tuple

from PIL import Image

from album_wallpaper.image_processing_utils import ImageProcessingUtils
from album_wallpaper.logger import Logger
from album_wallpaper.raster import Dimensions, PlacementRectangle, Raster


def truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def centered_offset(available: int, size: int, origin: int = 0) -> int:
    return truncating_div(available - size, 2) + origin


class CompositorService:
    """
    Pastes a full-canvas background and a foreground onto a blank canvas.
    Foreground pixels fully replace whatever lies under them; anything landing
    outside the canvas is dropped.
    """

    def __init__(self) -> None:
        self._logger: logging.Logger = Logger().get_logger()

    def compose(
        self,
        background: Raster,
        foreground: Raster,
        display: Dimensions,
        available: PlacementRectangle,
    ) -> Raster:
        display = Dimensions.of(display)
        available = PlacementRectangle.of(available)

        canvas = Image.new("RGB", display.as_tuple(), (0, 0, 0))

        # Background: centered on the whole canvas
        self._overlay(canvas, background, self.background_offset(background, display), "background")

        # Foreground: centered within the available rectangle, shifted by its origin
        self._overlay(canvas, foreground, self.foreground_offset(foreground, available), "foreground")

        return ImageProcessingUtils.from_pil(canvas)

    @staticmethod
    def background_offset(background: Raster, display: Dimensions) -> Tuple[int, int]:
        return (
            centered_offset(display.width, background.width),
            centered_offset(display.height, background.height),
        )

    @staticmethod
    def foreground_offset(foreground: Raster, available: PlacementRectangle) -> Tuple[int, int]:
        return (
            centered_offset(available.width, foreground.width, available.x),
            centered_offset(available.height, foreground.height, available.y),
        )

    def _overlay(self, canvas: Image.Image, layer: Raster, offset: Tuple[int, int], label: str) -> None:
        x, y = offset
        canvas_w, canvas_h = canvas.size
        if x < 0 or y < 0 or x + layer.width > canvas_w or y + layer.height > canvas_h:
            # Pillow clips the paste; make the dropped pixels visible in the log
            self._logger.warning(
                "Clipping %s %sx%s at (%s, %s) against %sx%s canvas",
                label, layer.width, layer.height, x, y, canvas_w, canvas_h,
            )
        canvas.paste(ImageProcessingUtils.to_pil(layer), (x, y))
