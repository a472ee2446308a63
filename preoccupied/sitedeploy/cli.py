"""
Command line interface for sitedeploy.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .deploy import placeholder_notice, run_deploy
from .errors import DeployFailedError, DeployTimeoutError, SiteDeployError
from .site import deploy_script_path, initialize_site, is_placeholder_script


def cmd_notice(options) -> int:
    return placeholder_notice()


def cmd_init(options) -> int:
    root = initialize_site(options.root)
    print(f'Created new site in {root}')
    return 0


def cmd_deploy(options) -> int:
    build_dir = Path(options.build_dir)
    script = Path(options.script) if options.script else deploy_script_path(build_dir)

    if is_placeholder_script(script):
        print(f'sitedeploy: warning: {script} is still the placeholder script',
              file=sys.stderr)

    try:
        output = asyncio.run(run_deploy(build_dir, script,
                                        shell=options.shell,
                                        timeout=options.timeout))
    except (DeployFailedError, DeployTimeoutError) as e:
        if e.output:
            print(e.output)
        raise

    if output:
        print(output)
    return 0


def cmd_serve(options) -> int:
    import uvicorn

    uvicorn.run('preoccupied.sitedeploy.app:app',
                host=options.host, port=options.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sitedeploy',
        description='Set up and run deploy scripts for static sites')
    parser.add_argument('--debug', action='store_true', default=False,
                        help='Enable debug logging')

    sub = parser.add_subparsers(dest='command')

    s = sub.add_parser('notice', help='Print the placeholder deploy reminder')
    s.set_defaults(func=cmd_notice)

    s = sub.add_parser('init', help='Create a new site skeleton in an empty directory')
    s.add_argument('root', help='Existing, empty directory for the new site')
    s.set_defaults(func=cmd_init)

    s = sub.add_parser('deploy', help="Run a built site's deploy script")
    s.add_argument('build_dir', help='Directory of the built site')
    s.add_argument('--script', default=None,
                   help='Deploy script (default: BUILD_DIR/_scripts/deploy.sh)')
    s.add_argument('--shell', default='bash',
                   help='Shell used to run the script (default: %(default)s)')
    s.add_argument('--timeout', type=float, default=None,
                   help='Give up after this many seconds')
    s.set_defaults(func=cmd_deploy)

    s = sub.add_parser('serve', help='Run the deploy webhook service')
    s.add_argument('--host', default='127.0.0.1')
    s.add_argument('--port', type=int, default=8000)
    s.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    options = parser.parse_args(argv)

    if not hasattr(options, 'func'):
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.DEBUG if options.debug else logging.WARNING)

    try:
        return options.func(options)
    except DeployFailedError as e:
        print(f'sitedeploy: deploy script exited with status {e.returncode}',
              file=sys.stderr)
        return e.returncode if e.returncode > 0 else 1
    except SiteDeployError as e:
        print(f'sitedeploy: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())


# The end.
