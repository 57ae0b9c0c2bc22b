"""Entry point for the work tracker.

Running this file starts the customtkinter window with one button per
configured category.  The same entry point is available as
``python -m worktracker`` or the installed ``worktracker`` command.
"""

import sys

from worktracker.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
