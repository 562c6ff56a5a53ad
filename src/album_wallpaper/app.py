import argparse
import os
import sys
import traceback
from typing import List, Optional

from album_wallpaper.config import Config
from album_wallpaper.errors import AlbumWallpaperError


def _positive(convert):
    def _parse(value: str):
        try:
            number = convert(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
        if number <= 0:
            raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
        return number

    return _parse


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="album-wallpaper",
        description="Turn the current album art into a desktop wallpaper.",
    )
    parser.add_argument("art_url", help="http(s)://, file:// URL or path of the album art")
    parser.add_argument("--config", help=f"YAML config file (default: ${Config.CONFIG_ENV_VAR} or {Config.DEFAULT_CONFIG_PATH})")
    parser.add_argument("--output", help="where to write the generated PNG")
    parser.add_argument("--width", type=_positive(int), help="display width in pixels")
    parser.add_argument("--height", type=_positive(int), help="display height in pixels")
    blur = parser.add_mutually_exclusive_group()
    blur.add_argument("--blur-radius", type=_positive(float), help="background blur radius in display pixels")
    blur.add_argument("--no-blur", action="store_true", help="use a plain resized background")
    parser.add_argument("--no-set", action="store_true", help="only write the PNG, leave the desktop setting alone")
    return parser


def _apply_overrides(config: dict, args: argparse.Namespace) -> None:
    if args.width is not None:
        config["display"]["width"] = args.width
    if args.height is not None:
        config["display"]["height"] = args.height
    if args.no_blur:
        config["background"]["blur_radius"] = None
    elif args.blur_radius is not None:
        config["background"]["blur_radius"] = args.blur_radius
    if args.output:
        config["wallpaper"]["output_path"] = os.path.abspath(args.output)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    # Config must exist before the logger and services pick it up
    config = Config(args.config).get_config()
    _apply_overrides(config, args)

    from album_wallpaper.logger import Logger
    from album_wallpaper.service.wallpaper_orchestrator import WallpaperOrchestrator
    from album_wallpaper.service.wallpaper_service import WallpaperService

    logger = Logger().get_logger()
    try:
        if args.no_set:
            orchestrator = WallpaperOrchestrator()
            path = WallpaperService().save(orchestrator.generate(args.art_url))
            logger.info(f"Wallpaper written to {path}")
            return 0
        return 0 if WallpaperOrchestrator().process(args.art_url, force_update=True) else 1
    except AlbumWallpaperError as e:
        logger.error(f"Error occurred: {e}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
