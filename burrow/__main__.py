"""Allow running burrow as ``python -m burrow``."""

import sys

from burrow.cli import main

sys.exit(main())
