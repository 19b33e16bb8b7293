"""
taskcore CLI — serve the API and work with the rule set.

Commands:
- taskcore serve          — Start the HTTP server (uvicorn)
- taskcore export-rules   — Write the rule set artifact as JSON
- taskcore validate       — Validate a JSON task payload against the rule set
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger("taskcore.cli")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="taskcore",
        description="taskcore — task creation service",
    )
    parser.add_argument(
        "--config", default=None, help="Path to taskcore.yaml (default: auto-discover)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # taskcore serve
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", help="Host to bind (default: from config)")
    serve_parser.add_argument("--port", type=int, help="Port to bind (default: from config)")

    # taskcore export-rules
    export_parser = subparsers.add_parser("export-rules", help="Write the rule set as JSON")
    export_parser.add_argument(
        "--output", "-o", help="Output file (default: stdout)"
    )

    # taskcore validate
    validate_parser = subparsers.add_parser("validate", help="Validate a task payload file")
    validate_parser.add_argument("payload", help="JSON file with titulo/descricao/data_vencimento/prioridade")
    validate_parser.add_argument("--lang", choices=["pt", "en"], help="Message language")

    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)
    elif args.command == "export-rules":
        return cmd_export_rules(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 0


def _load_config(args: argparse.Namespace):
    from taskcore.engine.config import load_config
    from taskcore.engine.errors import TaskConfigError

    try:
        return load_config(args.config)
    except TaskConfigError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return None


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from taskcore.web_apis.server import create_app

    config = _load_config(args)
    if config is None:
        return 1

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = args.host or config.server.host
    port = args.port or config.server.port
    print(f"Starting taskcore on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def cmd_export_rules(args: argparse.Namespace) -> int:
    from taskcore.rules.validate_task import task_rules

    artifact = task_rules.to_json()
    if args.output:
        Path(args.output).write_text(artifact + "\n", encoding="utf-8")
        print(f"Rule set written to {args.output}")
    else:
        print(artifact)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    from taskcore.engine.clock import today_in
    from taskcore.engine.errors import TaskValidationError
    from taskcore.rules.validate_task import task_rules

    config = _load_config(args)
    if config is None:
        return 1

    try:
        payload = json.loads(Path(args.payload).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"[ERROR] Could not read {args.payload}: {e}", file=sys.stderr)
        return 1
    if not isinstance(payload, dict):
        print("[ERROR] Payload must be a JSON object", file=sys.stderr)
        return 1

    try:
        draft = task_rules.validate(payload, today_in(config.zone), lang=args.lang)
    except TaskValidationError as e:
        print(f"[REJECTED] {e.code}: {e.message}")
        for detail in e.validation_errors:
            print(f"  - {detail['field']}: {detail['message']} ({detail['rule']})")
        return 2

    print("[OK] " + draft.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
