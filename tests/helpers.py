import numpy as np
from PIL import Image

from album_wallpaper.raster import Raster


def solid(width, height, color):
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return Raster.from_array(pixels)


def checkerboard(width, height, cell=8):
    ys, xs = np.mgrid[0:height, 0:width]
    on = ((xs // cell) + (ys // cell)) % 2 == 0
    pixels = np.where(on[..., None], 255, 0).astype(np.uint8).repeat(3, axis=2)
    return Raster.from_array(pixels)


def gradient(width, height):
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.stack(
        [xs % 256, ys % 256, (xs + ys) % 256], axis=2
    ).astype(np.uint8)
    return Raster.from_array(pixels)


def noise(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return Raster.from_array(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def write_png(path, raster, mode="RGB"):
    image = Image.frombytes("RGB", (raster.width, raster.height), raster.data)
    if mode != "RGB":
        image = image.convert(mode)
    image.save(path, format="PNG")
    return path
