import sys

from near_proximity.cli import main


sys.exit(main())
