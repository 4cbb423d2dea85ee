"""Allow running as `python -m chaintx`."""

import sys

from chaintx.cli import main

sys.exit(main())
