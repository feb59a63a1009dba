"""Allow ``python -m ftlcatalog``."""

import sys

from ftlcatalog.cli import main

sys.exit(main())
