"""
Configuration models and loading for the sitedeploy application.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from .deploy import run_deploy
from .site import deploy_script_path


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = '/config/config.yaml'


_config: Optional['RootConfig'] = None


class GlobalConfig(BaseModel):
    """
    Global configuration settings
    """

    webhook_secret: Optional[str] = None
    deploy_on_startup: bool = False
    shell: str = 'bash'
    timeout: Optional[float] = None


class SiteConfig(BaseModel):
    """
    Site configuration
    """

    name: str
    directory: str
    build_dir: Optional[str] = None
    script: Optional[str] = None
    webhook_secret: Optional[str] = None
    shell: str = 'bash'
    timeout: Optional[float] = None


    @model_validator(mode='after')
    def apply_directory_defaults(self) -> 'SiteConfig':
        """
        The built site and the deploy script both default to living
        under the site directory.
        """

        if self.build_dir is None:
            self.build_dir = self.directory
        if self.script is None:
            self.script = str(deploy_script_path(self.directory))
        return self


    async def deploy(self) -> str:
        """
        Run the deploy script for this site, returning its output.
        """

        return await run_deploy(
            build_dir=self.build_dir,
            script=self.script,
            shell=self.shell,
            timeout=self.timeout,
        )


class RootConfig(BaseModel):
    """
    Root configuration model
    """

    global_: GlobalConfig = Field(alias='global', default_factory=GlobalConfig)
    sites: Dict[str, SiteConfig] = Field(default_factory=dict)

    model_config = {'populate_by_name': True}


    @model_validator(mode='before')
    def apply_global_defaults(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply global config defaults to sites that don't have them set.
        """

        if not isinstance(v, dict) or 'global_' in v:
            # already constructed from models
            return v

        fixed = {}
        glbl = fixed['global'] = GlobalConfig.model_validate(v.get('global') or {})

        sites = fixed['sites'] = dict(v.get('sites') or {})
        for site_name, site in sites.items():
            site = sites[site_name] = dict(site)
            site.setdefault('name', site_name)
            site.setdefault('webhook_secret', glbl.webhook_secret)
            site.setdefault('shell', glbl.shell)
            site.setdefault('timeout', glbl.timeout)

        return fixed


def _config_from_env() -> Dict[str, Any]:
    """
    Build configuration dictionary from SITEDEPLOY_* environment variables.
    """

    global_config = {}
    pairs = (
        ('SITEDEPLOY_WEBHOOK_SECRET', 'webhook_secret'),
        ('SITEDEPLOY_SHELL', 'shell'))

    for env_var, config_key in pairs:
        value = os.environ.get(env_var)
        if value is not None:
            global_config[config_key] = value

    site_config = {}
    pairs = (
        ('SITEDEPLOY_SITE_NAME', 'name'),
        ('SITEDEPLOY_SITE_DIRECTORY', 'directory'),
        ('SITEDEPLOY_SITE_BUILD_DIR', 'build_dir'),
        ('SITEDEPLOY_SITE_SCRIPT', 'script'))

    for env_var, config_key in pairs:
        value = os.environ.get(env_var)
        if value is not None:
            site_config[config_key] = value

    if site_config:
        site_config.setdefault('name', 'default')

    result = {'global': global_config,}
    if site_config:
        result['sites'] = {site_config['name']: site_config}
    return result


def get_config() -> 'RootConfig':
    """
    Get the global config object.
    """

    global _config

    if _config is None:
        env_config = _config_from_env()
        config_path = os.environ.get('CONFIG_PATH', DEFAULT_CONFIG_PATH)

        if os.path.exists(config_path):
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            config_data['global'] = dict(config_data.get('global') or {}, **env_config['global'])
            config_data['sites'] = dict(config_data.get('sites') or {}, **env_config.get('sites', {}))
        else:
            config_data = env_config

        _config = RootConfig.model_validate(config_data)
        logger.info(f'Loaded configuration with {len(_config.sites)} sites')

    return _config


def get_site_config(site_name: str) -> Optional[SiteConfig]:
    """
    Get the site configuration for the given site name.
    """

    return get_config().sites.get(site_name)


# The end.
