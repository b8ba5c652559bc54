# -*- coding: utf-8 -*-
#
# rm-version-switcher : inspect and switch the next-boot partition on reMarkable devices
# License : BSD-3-Clause


"""
rm-version-switcher
~~~~~~~~~~~~~~~~~~~

inspect and switch the next-boot partition on A/B reMarkable devices
"""

# stdlib imports
import os
import platform
import sys

# app imports
from rm_version_switcher.cli.switcher import main


def init() -> None:
    """Handle main init"""
    # hard set no support for non linux platforms
    if "linux" not in sys.platform:
        sys.exit(
            "{0} only works on Linux... exiting...".format(os.path.basename(__file__))
        )

    # hard set no support for python < v3.9
    if sys.version_info < (3, 9):
        sys.exit(
            "{0} requires Python version 3.9 or higher...\nyou are trying to run with Python version {1}...\nexiting...".format(
                os.path.basename(__file__), platform.python_version()
            )
        )

    if __name__ == "__main__":
        sys.exit(main())


init()
