"""
Task API CLI — Command-Line Interface
======================================
Entry point for running the server and peeking at the store.

Usage:
    # Start the server on the default port (3000)
    python -m taskapi.cli start

    # Start with a different store and port
    python -m taskapi.cli start --data ./data/tasks.json --port 8080

    # Print the stored tasks
    python -m taskapi.cli list --data ./data/tasks.json
"""

from __future__ import annotations

import argparse
import logging

from taskapi.config import ServerConfig
from taskapi.service import TaskService
from taskapi.storage.registry import get_storage, list_storages


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def setup_logging(level: str = "info"):
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_config(args) -> ServerConfig:
    """Environment settings with any CLI flags layered on top."""
    return ServerConfig.from_env().override(
        data_file=getattr(args, "data", None),
        storage=getattr(args, "storage", None),
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
        log_level=getattr(args, "log_level", None),
    )


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_start(args):
    """Launch the HTTP server."""
    config = build_config(args)
    setup_logging(config.log_level)

    from taskapi.server import run_server
    run_server(config)


def cmd_list(args):
    """Print every stored task."""
    config = build_config(args)
    setup_logging(config.log_level)

    service = TaskService(get_storage(config))
    tasks = service.list_tasks()
    if not tasks:
        print("No tasks.")
        return

    for task in tasks:
        mark = "x" if task.completed else " "
        print(f"  [{mark}] {task.id:>4}  {task.title}")


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskapi",
        description="Task API — JSON-file backed task service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  taskapi start\n"
            "  taskapi start --port 8080 --data ./tasks.json\n"
            "  taskapi list\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # start
    p_start = subparsers.add_parser("start", help="Run the HTTP server")
    p_start.add_argument("--host", default=None, help="Bind host (default: 0.0.0.0)")
    p_start.add_argument("--port", default=None, type=int, help="Port number (default: 3000)")
    p_start.add_argument("--data", default=None, help="Path to the tasks JSON file")
    p_start.add_argument("--storage", default=None, choices=list_storages(),
                         help="Storage backend (default: json)")
    p_start.add_argument("--log-level", default=None,
                         choices=["debug", "info", "warning", "error"],
                         help="Log level (default: info)")

    # list
    p_list = subparsers.add_parser("list", help="Print stored tasks")
    p_list.add_argument("--data", default=None, help="Path to the tasks JSON file")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "start": cmd_start,
        "list": cmd_list,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
