import sys

from autosd.cli import main

sys.exit(main())
