import sys
from mpd_switcher.cli import main

if __name__ == '__main__':
    sys.exit(main())
