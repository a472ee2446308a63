"""
FastAPI webhook application for the sitedeploy service.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI, Header, HTTPException

from .config import get_config
from .errors import DeployFailedError


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# one lock per site name, a site is never deployed twice at once
_deploy_locks: Dict[str, asyncio.Lock] = {}


def deploy_lock(name: str) -> asyncio.Lock:
    lock = _deploy_locks.get(name)
    if lock is None:
        lock = _deploy_locks[name] = asyncio.Lock()
    return lock


async def app_startup():
    """
    Startup event handler for the app
    """

    # fetch configuration for the first time
    try:
        config = get_config()
    except Exception as e:
        logger.error(f'Failed to load configuration: {e}', exc_info=True)
        raise

    if not config.global_.deploy_on_startup:
        return

    for site_name, site in config.sites.items():
        try:
            logger.info(f"Deploying site '{site_name}' on startup...")
            async with deploy_lock(site_name):
                await site.deploy()
            logger.info(f"Successfully deployed site '{site_name}'")
        except Exception as e:
            logger.error(f"Failed to deploy site '{site_name}' on startup: {e}", exc_info=True)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """
    Lifespan event handler for the app
    """

    logger.info('Starting up...')

    await app_startup()

    try:
        yield
    finally:

        logger.info('Shutting down...')


app = FastAPI(lifespan=app_lifespan)


@app.post('/deploy/{name}')
async def deploy(name: str = 'default', x_deploy_token: str = Header(None)):
    """
    Deploy a specific site by name
    """

    config = get_config()

    if name not in config.sites:
        raise HTTPException(status_code=404, detail=f"Site '{name}' not found")

    site = config.sites[name]
    webhook_secret = site.webhook_secret

    if webhook_secret and x_deploy_token != webhook_secret:
        raise HTTPException(status_code=401, detail='Bad secret')

    lock = deploy_lock(name)
    if lock.locked():
        raise HTTPException(status_code=409, detail='Deploy already in progress')

    async with lock:
        try:
            output = await site.deploy()
        except DeployFailedError as e:
            logger.error(f"Deploy of site '{name}' failed: {e}")
            raise HTTPException(status_code=500, detail=f'Deploy failed: {e}')
        except Exception as e:
            logger.error(f"Error deploying site '{name}': {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f'Deploy failed: {e}')

    return {'status': 'ok', 'site': name, 'output': output}


# The end.
