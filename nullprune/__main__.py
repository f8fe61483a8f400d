import sys

from nullprune.cli import main

sys.exit(main())
