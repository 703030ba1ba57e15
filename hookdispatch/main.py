"""Command-line entry point: dispatch one push event and print the response."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

from hookdispatch.config.environment import EnvironmentConfig
from hookdispatch.config.exceptions import ConfigurationError
from hookdispatch.config.loader import load_config, validate_config_file
from hookdispatch.config.models import AppConfig, QueueBackend
from hookdispatch.dispatch import PushDispatcher
from hookdispatch.events import EventError, parse_push_event
from hookdispatch.logging import get_logger
from hookdispatch.logging.config import configure_logging
from hookdispatch.persistence import PersistenceError, close_database, init_database
from hookdispatch.queue import BuildQueueError, get_build_queue
from hookdispatch.registry import FileJobRegistry

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Path, log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > Environment > Config.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def read_event_payload(source: str) -> str:
    """Read the raw event from a file path, or from stdin when ``source`` is '-'."""
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text()
    except OSError as e:
        raise EventError(f"Cannot read event file {source}: {e}") from e


def main(argv=None) -> int:
    """
    Dispatch a single push event.

    Returns:
        Exit code (0 for success, 1 on configuration, event or queue errors).
    """
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description="Push Hook Dispatcher - schedule builds for jobs tracking a pushed repository"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--event",
        default="-",
        help="Path to the webhook payload JSON, or '-' for stdin (default: -)",
    )
    parser.add_argument(
        "--bypass-polling",
        action="store_true",
        help="Schedule builds directly instead of asking jobs to poll",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )

    args = parser.parse_args(argv)

    if args.validate_config:
        return 0 if validate_config_file(args.config) else 1

    queue = None
    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Push Hook Dispatcher starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config),
                "log_level": env_config.log_level,
                "job_count": len(app_config.jobs),
                "queue_backend": QueueBackend(app_config.build_queue.backend).value,
            },
        )

        event = parse_push_event(read_event_payload(args.event))

        if QueueBackend(app_config.build_queue.backend) == QueueBackend.DATABASE:
            init_database(env_config.database_url)

        queue = get_build_queue(app_config.build_queue, env_config)
        dispatcher = PushDispatcher(
            registry=FileJobRegistry(args.config),
            queue=queue,
            global_config=app_config.global_settings,
        )

        result = dispatcher.dispatch(event, bypass_polling=args.bypass_polling)
        print(json.dumps(result.to_payload(), indent=2))

        logger.info(
            "Push Hook Dispatcher finished",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
                "message_count": len(result.messages),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except EventError as e:
        print(f"Event Error: {e}", file=sys.stderr)
        logger.error(
            f"Event rejected: {e}",
            extra={"event": "events.rejected", "error_type": type(e).__name__},
        )
        return 1
    except BuildQueueError as e:
        print(f"Build Queue Error: {e}", file=sys.stderr)
        logger.error(
            f"Dispatch aborted: {e}",
            extra={"event": "dispatch.aborted", "error_type": type(e).__name__},
        )
        return 1
    except PersistenceError as e:
        print(f"Database Error: {e}", file=sys.stderr)
        logger.error(
            f"Build request store unavailable: {e}",
            extra={"event": "database.error", "error_type": type(e).__name__},
        )
        return 1
    finally:
        if queue is not None:
            queue.close()
        close_database()


if __name__ == "__main__":
    sys.exit(main())
