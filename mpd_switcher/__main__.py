import sys
from mpd_switcher.cli import main

sys.exit(main())
