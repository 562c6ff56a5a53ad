import logging
from typing import Tuple

from PIL import Image, ImageFilter

from album_wallpaper.logger import Logger
from album_wallpaper.raster import Dimensions, Raster


class ImageProcessingUtils:
    _logger: logging.Logger = Logger().get_logger()

    @staticmethod
    def crop_box(source: Dimensions, target: Dimensions) -> Tuple[int, int, int, int]:
        """
        Largest centered rectangle inside `source` with the aspect ratio of `target`.

        Returns (left, top, right, bottom). Margins are trimmed from the longer
        axis only; an odd leftover pixel stays on the right/bottom margin.
        """
        if source.width * target.height > source.height * target.width:
            # Source is wider than the target: trim left and right
            crop_h = source.height
            crop_w = (source.height * target.width + target.height // 2) // target.height
            crop_w = max(1, min(source.width, crop_w))
        else:
            crop_w = source.width
            crop_h = (source.width * target.height + target.width // 2) // target.width
            crop_h = max(1, min(source.height, crop_h))

        left = (source.width - crop_w) // 2
        top = (source.height - crop_h) // 2
        return (left, top, left + crop_w, top + crop_h)

    @staticmethod
    def resize(raster: Raster, target: Dimensions) -> Raster:
        """
        Crop `raster` to the aspect ratio of `target` and scale it to exactly
        `target` with the 3-lobe Lanczos filter.
        """
        target = Dimensions.of(target)
        box = ImageProcessingUtils.crop_box(raster.dimensions, target)
        ImageProcessingUtils._logger.debug(
            "Resizing %sx%s -> %sx%s (crop box %s)",
            raster.width, raster.height, target.width, target.height, box,
        )
        image = ImageProcessingUtils.to_pil(raster)
        resized = image.resize(target.as_tuple(), Image.LANCZOS, box=box)
        return ImageProcessingUtils.from_pil(resized)

    @staticmethod
    def gaussian_blur(raster: Raster, radius: float) -> Raster:
        if radius <= 0:
            return raster
        image = ImageProcessingUtils.to_pil(raster)
        return ImageProcessingUtils.from_pil(image.filter(ImageFilter.GaussianBlur(radius=radius)))

    @staticmethod
    def to_pil(raster: Raster) -> Image.Image:
        return Image.frombytes("RGB", (raster.width, raster.height), raster.data)

    @staticmethod
    def from_pil(image: Image.Image) -> Raster:
        if image.mode != "RGB":
            image = image.convert("RGB")
        return Raster(image.width, image.height, image.tobytes())
