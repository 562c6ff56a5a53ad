import sys

from album_wallpaper.app import main

sys.exit(main())
