"""
Allows running sitedeploy as ``python -m preoccupied.sitedeploy``

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import sys

from .cli import main


sys.exit(main())


# The end.
