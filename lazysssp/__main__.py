"""Allow ``python -m lazysssp``."""

import sys

from .cli import main

sys.exit(main())
