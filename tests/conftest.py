"""
Shared pytest fixtures for sitedeploy tests.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import tempfile

import pytest

from preoccupied.sitedeploy.config import GlobalConfig, RootConfig, SiteConfig


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for tests.
    """

    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def site_config():
    """
    Create a SiteConfig for testing.
    """

    return SiteConfig(
        name='test-site',
        directory='/tmp/test-site',
        webhook_secret='secret123'
    )


@pytest.fixture
def mock_config(site_config):
    """
    Create a RootConfig holding the test site.
    """

    return RootConfig(
        global_=GlobalConfig(),
        sites={'test-site': site_config}
    )


@pytest.fixture
def mock_env_vars(monkeypatch):
    """
    Clear and optionally set environment variables for testing.
    """

    env_vars_to_clear = [
        'CONFIG_PATH',
        'SITEDEPLOY_WEBHOOK_SECRET',
        'SITEDEPLOY_SHELL',
        'SITEDEPLOY_SITE_NAME',
        'SITEDEPLOY_SITE_DIRECTORY',
        'SITEDEPLOY_SITE_BUILD_DIR',
        'SITEDEPLOY_SITE_SCRIPT',
    ]

    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)

    return monkeypatch


# The end.
