"""Allow ``python -m vidint``."""

import sys

from vidint.cli import main

sys.exit(main())
