"""Album art to desktop wallpaper: crop-and-scale, blurred backdrop, compositing."""

__version__ = "0.1.0"
