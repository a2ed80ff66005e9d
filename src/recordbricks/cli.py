"""
Command-line interface for recordbricks.

Thin wrapper over RecordWorkspace for scripting and quick inspection of a
backend: every command prints its result as JSON on stdout and exits with a
non-zero status when the operation returned nothing (None/False).
"""

import argparse
import json
import sys
import uuid
from typing import Any, Callable, Dict, List, Optional

from recordbricks.core.logger import configure_root_logger, get_logger, push_request_id, reset_request_id
from recordbricks.models.recordbricks_config import RecordbricksConfig
from recordbricks.providers.env_secrets_provider import EnvSecretsProvider
from recordbricks.workspace import RecordWorkspace

logger = get_logger(__name__)


def load_config(config_path: Optional[str] = None) -> RecordbricksConfig:
    if config_path:
        return RecordbricksConfig.from_file(config_path)
    return RecordbricksConfig.from_env()


def validate_config(config_path: str) -> bool:
    """
    Validate a configuration file without contacting the backend.

    Args:
        config_path: Path to a JSON or YAML configuration file

    Returns:
        True if configuration is valid

    Raises:
        Exception: If the file is missing or invalid

    Example:
        >>> validate_config("/path/to/recordbricks.yaml")
        True
    """
    try:
        logger.info(f"Validating config: {config_path}")
        RecordbricksConfig.from_file(config_path)
        logger.info("Configuration is valid")
        return True
    except Exception as e:
        logger.error(f"Config validation failed: {str(e)}")
        raise


def _parse_data(raw: str) -> Dict[str, Any]:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("--data must be a JSON object")
    return data


def _add_crud_commands(subparsers: Any, entity: str) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(f"{entity}s", help=f"Work with {entity} records")
    actions = parser.add_subparsers(dest="action", required=True)

    actions.add_parser("list", help=f"List all {entity}s")

    get_parser = actions.add_parser("get", help=f"Fetch one {entity}")
    get_parser.add_argument("id")

    create_parser = actions.add_parser("create", help=f"Create a {entity}")
    create_parser.add_argument("--data", required=True, help="Record fields as a JSON object")

    update_parser = actions.add_parser("update", help=f"Update a {entity}")
    update_parser.add_argument("id")
    update_parser.add_argument("--data", required=True, help="Record fields as a JSON object")

    delete_parser = actions.add_parser("delete", help=f"Delete a {entity}")
    delete_parser.add_argument("id")
    return actions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recordbricks",
        description="Client and project records on a low-code record API",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file (JSON or YAML); defaults to RECORDBRICKS_* env vars",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    validate_parser = subparsers.add_parser("validate", help="Validate configuration file")
    validate_parser.add_argument("config_file", help="Path to configuration file (JSON or YAML)")

    client_actions = _add_crud_commands(subparsers, "client")
    client_projects = client_actions.add_parser("projects", help="List the projects of a client")
    client_projects.add_argument("id")

    project_actions = _add_crud_commands(subparsers, "project")
    project_milestones = project_actions.add_parser("milestones", help="List the milestones of a project")
    project_milestones.add_argument("id")

    return parser


def run_command(ws: RecordWorkspace, args: argparse.Namespace) -> Any:
    service = ws.clients if args.command == "clients" else ws.projects

    handlers: Dict[str, Callable[[], Any]] = {
        "list": service.get_all,
        "get": lambda: service.get_by_id(args.id),
        "create": lambda: service.create(_parse_data(args.data)),
        "update": lambda: service.update(args.id, _parse_data(args.data)),
        "delete": lambda: service.delete(args.id),
        "projects": lambda: ws.clients.get_projects_by_client_id(args.id),
        "milestones": lambda: ws.projects.get_milestones_by_project_id(args.id),
    }
    return handlers[args.action]()


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Command-line entry point.

    Usage:
        recordbricks validate recordbricks.yaml
        recordbricks -c recordbricks.yaml clients list
        recordbricks clients projects 12
        recordbricks projects create --data '{"name": "Website relaunch", "clientId": 12}'
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_root_logger("DEBUG" if args.verbose else "INFO", stream=sys.stderr)

    if args.command == "validate":
        try:
            validate_config(args.config_file)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    if args.command not in ("clients", "projects"):
        parser.print_help()
        sys.exit(0)

    token = push_request_id(uuid.uuid4().hex[:12])
    try:
        config = load_config(args.config)
        if args.verbose:
            config = config.model_copy(update={"log_level": "DEBUG"})
        with RecordWorkspace(config, secrets_provider=EnvSecretsProvider()) as ws:
            result = run_command(ws, args)
    except Exception as e:
        logger.error(f"{args.command} {args.action} failed: {e}")
        sys.exit(1)
    finally:
        reset_request_id(token)

    print(json.dumps(result, indent=2, default=str))
    sys.exit(0 if result not in (None, False) else 1)


if __name__ == "__main__":
    cli()
