"""Allow ``python -m sqlpad``."""

import sys

from sqlpad.cli import main

sys.exit(main())
