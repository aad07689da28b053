"""dicemind Command Line main entrypoint: ``python -m dicemind``."""
# Copyright 2026, dicemind contributors
#
# Licensed under the Eiffel Forum License 2.
from __future__ import annotations

import sys

from dicemind.cli.run import main


if __name__ == '__main__':
    sys.exit(main())
