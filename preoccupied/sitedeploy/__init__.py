"""
Deploy scripts for static sites, with a webhook to trigger them.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

from preoccupied.sitedeploy.config import get_config, get_site_config
from preoccupied.sitedeploy.deploy import PLACEHOLDER_NOTICE, placeholder_notice, run_deploy
from preoccupied.sitedeploy.site import initialize_site


__all__ = [
    'PLACEHOLDER_NOTICE', 'get_config', 'get_site_config',
    'initialize_site', 'placeholder_notice', 'run_deploy',
]


# The end.
