"""
Site directory layout and scaffolding for new sites.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import logging
from pathlib import Path

from .errors import PathLike, SiteRootMissingError, SiteRootPopulatedError


logger = logging.getLogger(__name__)


TEMPLATES_DIR = Path(__file__).parent / 'templates'

DEPLOY_TEMPLATE = TEMPLATES_DIR / 'deploy.sh'
LAYOUT_TEMPLATE = TEMPLATES_DIR / 'default.html'

SITE_DIRS = ('_layouts', '_scripts', 'assets', 'images')


def deploy_script_path(root: PathLike) -> Path:
    return Path(root) / '_scripts' / 'deploy.sh'


def open_site(root: PathLike) -> Path:
    """
    Check that the site root exists, and return it resolved
    """

    root_path = Path(root)
    if not root_path.is_dir():
        raise SiteRootMissingError(root)
    return root_path.resolve()


def initialize_site(root: PathLike) -> Path:
    """
    Populate an existing, empty directory with the skeleton of a new
    site: the layout and script directories, a default layout, and
    the placeholder deploy script.
    """

    root_path = Path(root)
    if not root_path.is_dir():
        raise SiteRootMissingError(root)
    if any(root_path.iterdir()):
        raise SiteRootPopulatedError(root)

    logger.info(f'Creating new site in {root_path}')

    for name in SITE_DIRS:
        (root_path / name).mkdir()

    (root_path / '_layouts' / 'default.html').write_text(LAYOUT_TEMPLATE.read_text())

    script = deploy_script_path(root_path)
    script.write_text(DEPLOY_TEMPLATE.read_text())
    script.chmod(0o755)

    (root_path / 'assets' / '.keep').write_text('')
    (root_path / 'images' / '.keep').write_text('')

    return root_path.resolve()


def is_placeholder_script(script: PathLike) -> bool:
    """
    True if the deploy script is still the unedited placeholder
    """

    script_path = Path(script)
    if not script_path.is_file():
        return False
    return script_path.read_bytes() == DEPLOY_TEMPLATE.read_bytes()


# The end.
