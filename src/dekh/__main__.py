"""Allow ``python -m dekh``."""

import sys

from dekh.cli import main

sys.exit(main())
