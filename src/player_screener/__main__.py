import sys

from player_screener.cli import main

sys.exit(main())
