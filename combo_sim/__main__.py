"""Allow ``python -m combo_sim``."""

import sys

from combo_sim.cli import main

sys.exit(main())
