"""
HTTP server for the Similar Image Scanner.

Exposes the JSON scan API (see simscan.api) so another application can start
scans, poll them and cancel them.

Run with: python -m simscan serve [--host HOST] [--port PORT] [-q | -v]
"""

import argparse
import logging
from typing import Optional

from flask import Flask

from .api import api, REGISTRY_KEY
from .jobs import ScanRegistry
from .user_config import get_user_config

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 5000

# Server verbosity
LOG_QUIET = 0    # errors only
LOG_MINIMAL = 1  # banner plus scan logs
LOG_VERBOSE = 2  # every request


def create_app(log_level: int = LOG_MINIMAL, registry: Optional[ScanRegistry] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        log_level: LOG_QUIET, LOG_MINIMAL or LOG_VERBOSE
        registry: Where scans are tracked; a new registry when omitted
    """
    app = Flask(__name__)
    app.config['SIMSCAN_WORKERS'] = get_user_config().default_workers
    app.extensions[REGISTRY_KEY] = registry if registry is not None else ScanRegistry()

    # werkzeug logs one line per request; keep that for verbose mode only
    if log_level != LOG_VERBOSE:
        werkzeug_level = logging.ERROR if log_level == LOG_QUIET else logging.WARNING
        logging.getLogger('werkzeug').setLevel(werkzeug_level)

    app.register_blueprint(api)
    return app


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Serve the similar image scan API')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log errors')
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Log debug messages and every request')
    parser.add_argument('-p', '--port', type=int, default=DEFAULT_PORT,
                        help=f'Port to listen on (default: {DEFAULT_PORT})')
    parser.add_argument('--host', default=DEFAULT_HOST,
                        help=f'Interface to bind (default: {DEFAULT_HOST})')
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point for simscan-server."""
    args = _parse_args(argv)

    if args.quiet:
        log_level, root_level = LOG_QUIET, logging.ERROR
    elif args.verbose:
        log_level, root_level = LOG_VERBOSE, logging.DEBUG
    else:
        log_level, root_level = LOG_MINIMAL, logging.INFO

    logging.basicConfig(
        level=root_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    app = create_app(log_level)

    if log_level != LOG_QUIET:
        print(f"\n  Scan API listening on http://{args.host}:{args.port}/api/ping")
        print("  Ctrl+C stops the server\n")

    try:
        app.run(host=args.host, port=args.port, debug=False, threaded=True, use_reloader=False)
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    main()
