from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from album_wallpaper.errors import InvalidDimensionError, PreconditionViolationError

CHANNELS = 3


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionError(
                f"Dimensions must be strictly positive, got {self.width}x{self.height}"
            )

    @staticmethod
    def of(value: Union["Dimensions", Tuple[int, int]]) -> "Dimensions":
        if isinstance(value, Dimensions):
            return value
        width, height = value
        return Dimensions(int(width), int(height))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class PlacementRectangle:
    """
    Sub-region of the display canvas the foreground is centered within.
    x and y are added to the centering offset and may be negative.
    """
    x: int
    y: int
    width: int
    height: int

    @staticmethod
    def of(value: Union["PlacementRectangle", Tuple[int, int, int, int]]) -> "PlacementRectangle":
        if isinstance(value, PlacementRectangle):
            return value
        x, y, width, height = value
        return PlacementRectangle(int(x), int(y), int(width), int(height))

    @staticmethod
    def full(display: Dimensions) -> "PlacementRectangle":
        return PlacementRectangle(0, 0, display.width, display.height)

    @staticmethod
    def display_center(display: Dimensions) -> "PlacementRectangle":
        """Zero-sized rectangle at the canvas center: the foreground is centered on that point."""
        return PlacementRectangle(display.width // 2, display.height // 2, 0, 0)


@dataclass(frozen=True)
class Raster:
    """
    Packed RGB pixels, row-major, 3 bytes per pixel, no padding.
    Pipeline stages never mutate a Raster; each one returns a new instance.
    """
    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * CHANNELS
        if self.width <= 0 or self.height <= 0 or len(self.data) != expected:
            raise PreconditionViolationError(
                f"Raster buffer holds {len(self.data)} bytes, "
                f"expected {expected} for {self.width}x{self.height}"
            )

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    @staticmethod
    def blank(dimensions: Dimensions) -> "Raster":
        return Raster(
            dimensions.width,
            dimensions.height,
            bytes(dimensions.width * dimensions.height * CHANNELS),
        )

    @staticmethod
    def from_array(pixels: np.ndarray) -> "Raster":
        """Build a Raster from an (H, W, 3) uint8 array."""
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise PreconditionViolationError(f"Expected an (H, W, 3) array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        return Raster(width, height, np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())

    def to_array(self) -> np.ndarray:
        """Read-only (H, W, 3) uint8 view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height}")
        offset = (y * self.width + x) * CHANNELS
        return tuple(self.data[offset:offset + CHANNELS])

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"
