"""Allow `python -m media_inventory`."""

import sys

from .main import main

sys.exit(main())
