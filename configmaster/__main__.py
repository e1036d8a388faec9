"""
Run the ConfigMaster service.

Usage:
    python -m configmaster [--config-file PATH] [--host HOST] [--port PORT] [--app.name=VALUE ...]

Any ``--app.<key>`` argument overrides the environment and the properties file.
"""
import argparse
import sys
from typing import Dict, List, Optional, Tuple

import uvicorn

from configmaster.config.settings import APP_PREFIX, ConfigurationError, Settings, load_app_properties
from configmaster.main import create_app
from configmaster.utils.logging import get_config_logger, initialize_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="configmaster",
        description="Serve application configuration on GET /config/info",
        epilog="Application properties can be overridden with --app.name=VALUE, "
               "--app.description=VALUE and --app.version=VALUE."
    )
    parser.add_argument("--config-file", help="properties file with app.* keys")
    parser.add_argument("--host", help="interface to bind (default: HOST setting)")
    parser.add_argument("--port", type=int, help="port to bind (default: PORT setting)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, Dict[str, str]]:
    """Split the command line into server options and app.* overrides"""
    parser = build_parser()
    args, remaining = parser.parse_known_args(argv)

    overrides: Dict[str, str] = {}
    unknown: List[str] = []
    items = iter(remaining)
    for item in items:
        if not item.startswith(f"--{APP_PREFIX}."):
            unknown.append(item)
            continue
        key, sep, value = item[2:].partition("=")
        if not sep:
            value = next(items, None)
            if value is None:
                parser.error(f"argument --{key}: expected one argument")
        overrides[key] = value

    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")

    return args, overrides


def main(argv: Optional[List[str]] = None) -> int:
    args, overrides = parse_args(argv)
    settings = Settings()

    try:
        properties = load_app_properties(args.config_file or settings.CONFIG_FILE or None, overrides)
    except ConfigurationError as e:
        initialize_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)
        get_config_logger().error(
            f"Startup aborted: {e}",
            extra={'event_type': 'configuration_error'}
        )
        return 1

    app = create_app(properties, settings)
    uvicorn.run(app, host=args.host or settings.HOST, port=args.port or settings.PORT)
    return 0


if __name__ == "__main__":
    sys.exit(main())
