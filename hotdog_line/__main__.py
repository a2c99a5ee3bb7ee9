import sys

from hotdog_line.cli import main

sys.exit(main())
