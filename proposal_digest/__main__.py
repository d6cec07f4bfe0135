"""Allow `python -m proposal_digest`."""

import sys

from proposal_digest.cli import main

sys.exit(main())
