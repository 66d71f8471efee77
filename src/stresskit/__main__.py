"""Allow `python -m stresskit`."""

import sys

from stresskit.cli import main

sys.exit(main())
