"""Allow ``python -m hopsim``."""

import sys

from .main import main

sys.exit(main())
