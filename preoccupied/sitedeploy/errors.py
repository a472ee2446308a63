"""
Exceptions raised by the sitedeploy package.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

from pathlib import Path
from typing import Union


PathLike = Union[str, Path]


class SiteDeployError(Exception):
    """
    Base class for all sitedeploy errors
    """


class SiteRootMissingError(SiteDeployError):

    def __init__(self, root: PathLike):
        self.root = root
        super().__init__(f"Can't reach root dir {root}")


class SiteRootPopulatedError(SiteDeployError):

    def __init__(self, root: PathLike):
        self.root = root
        super().__init__(
            f"Root dir is nonempty, you probably don't want to create a site here: {root}")


class BuildDirMissingError(SiteDeployError):

    def __init__(self, build_dir: PathLike):
        self.build_dir = build_dir
        super().__init__(f"Built site directory {build_dir} does not exist")


class DeployScriptMissingError(SiteDeployError):

    def __init__(self, script: PathLike):
        self.script = script
        super().__init__(f"Deploy script {script} does not exist")


class DeployShellError(SiteDeployError):

    def __init__(self, shell: str, error: OSError):
        self.shell = shell
        self.error = error
        super().__init__(f"Can't run deploy shell {shell}: {error.strerror or error}")


class DeployFailedError(SiteDeployError):
    """
    The deploy script exited with a non-zero status. The combined
    stdout and stderr of the script is kept in ``output``.
    """

    def __init__(self, returncode: int, script: PathLike, output: str = ''):
        self.returncode = returncode
        self.script = script
        self.output = output

        message = f"Deploy script {script} exited with status {returncode}"
        if output:
            message = f"{message}:\n{output}"
        super().__init__(message)


class DeployTimeoutError(SiteDeployError):

    def __init__(self, timeout: float, script: PathLike, output: str = ''):
        self.timeout = timeout
        self.script = script
        self.output = output
        super().__init__(f"Deploy script {script} did not finish within {timeout} seconds")


# The end.
