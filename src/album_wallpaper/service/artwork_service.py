import io
import logging
import os
from typing import Optional
from urllib.parse import unquote

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from album_wallpaper.config import Config
from album_wallpaper.errors import DecodeFailureError, FetchFailureError
from album_wallpaper.image_processing_utils import ImageProcessingUtils
from album_wallpaper.logger import Logger
from album_wallpaper.raster import Raster

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "image/avif,image/webp,image/apng,image/*;q=0.8,*/*;q=0.5",
}


class ArtworkService:
    """Fetches album art from an http(s) or file URL and decodes it to a Raster."""

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._logger: logging.Logger = Logger().get_logger()
        self._config: dict = Config().get_config()

        acfg = self._config.get("artwork", {}) or {}
        self._timeout = float(acfg.get("request_timeout_seconds", 10))

        # HTTP session for image fetches (reuses connections)
        self._session = session or requests.Session()
        self._session.headers.update(_DEFAULT_HEADERS)

    def load(self, art_url: str) -> Raster:
        return self.decode(self.fetch(art_url))

    def fetch(self, art_url: str) -> bytes:
        if not art_url:
            raise FetchFailureError("No art url given.")
        self._logger.info(f"Art url: {art_url}")
        if art_url.startswith(("http://", "https://")):
            return self._fetch_http(art_url)
        return self._read_file(art_url)

    def decode(self, data: bytes) -> Raster:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img = ImageOps.exif_transpose(img)
                return ImageProcessingUtils.from_pil(img.convert("RGB"))
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            self._logger.error(f"Artwork decode failed: {e}")
            raise DecodeFailureError("Artwork decode failed.") from e

    def _fetch_http(self, url: str) -> bytes:
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            self._logger.error(f"Error downloading art {url}: {e}")
            raise FetchFailureError(f"Error downloading art {url}.") from e

        if not resp.ok:
            self._logger.error(f"Got {resp.status_code} {resp.reason} while downloading art")
            raise FetchFailureError(f"Got {resp.status_code} {resp.reason} while downloading art")

        ct = resp.headers.get("Content-Type", "")
        if ct and not ct.lower().startswith("image/"):
            # Some players serve art as octet-stream; let the decoder decide
            self._logger.debug(f"Non-image content-type {ct} from {url}")
        return resp.content

    def _read_file(self, art_url: str) -> bytes:
        # Strip the scheme only; a malformed file://relative/path keeps its first segment
        path = unquote(art_url[len("file://"):]) if art_url.startswith("file://") else art_url
        path = os.path.expanduser(path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            self._logger.error(f"Error reading art file {path}: {e}")
            raise FetchFailureError(f"Error reading art file {path}.") from e
