class AlbumWallpaperError(Exception):
    """Base class for every error raised by album_wallpaper."""


class InvalidDimensionError(AlbumWallpaperError, ValueError):
    """A requested width or height is zero or negative."""


class PreconditionViolationError(AlbumWallpaperError, AssertionError):
    """A raster buffer disagrees with its declared size. Indicates a caller bug."""


class FetchFailureError(AlbumWallpaperError, RuntimeError):
    pass


class DecodeFailureError(AlbumWallpaperError, RuntimeError):
    pass


class WriteFailureError(AlbumWallpaperError, RuntimeError):
    pass


class WallpaperSetFailureError(AlbumWallpaperError, RuntimeError):
    pass


class InvalidBlurRadiusError(AlbumWallpaperError, ValueError):
    """A blur radius of zero or less was requested."""
