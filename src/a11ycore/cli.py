"""
Command line entry point for a11ycore.
"""

from __future__ import annotations

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Optional

from pydantic import ValidationError

from a11ycore import BlessPolicy, bless, coerce_tree, validate
from a11ycore.adapters import cdp_to_semantic_node
from a11ycore.logging import configure_logging
from a11ycore.models import SemanticNode
from a11ycore.rules import simulate_tab_navigation

INPUT_FORMATS = ("semantic", "cdp")


def _add_tree_arguments(command: argparse.ArgumentParser) -> None:
    command.add_argument(
        "tree",
        metavar="TREE",
        help="Path to a JSON tree, or '-' to read stdin.",
    )
    command.add_argument(
        "--input",
        choices=INPUT_FORMATS,
        default="semantic",
        help="Input format: semantic tree JSON (default) or CDP AXNode array.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a11ycore",
        description="a11ycore CLI: evaluate accessibility trees.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the installed a11ycore version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log to stderr (-v for INFO, -vv for DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        help="Explicit log level (overrides -v and A11YCORE_LOG_LEVEL).",
    )
    subparsers = parser.add_subparsers(dest="command")

    validate_cmd = subparsers.add_parser(
        "validate",
        help="Print every finding for a tree.",
    )
    _add_tree_arguments(validate_cmd)

    bless_cmd = subparsers.add_parser(
        "bless",
        help="Pass/fail a tree; exits 1 when any finding is produced.",
    )
    _add_tree_arguments(bless_cmd)
    bless_cmd.add_argument(
        "--policy",
        help="Path to a JSON BlessPolicy (recorded, not yet applied).",
    )

    tab_order = subparsers.add_parser(
        "tab-order",
        help="Print the synthesized keyboard tab order.",
    )
    _add_tree_arguments(tab_order)
    return parser


def _resolve_log_level(args: argparse.Namespace) -> Optional[str]:
    if args.log_level:
        return args.log_level
    if args.verbose >= 2:
        return "DEBUG"
    if args.verbose == 1:
        return "INFO"
    return None


def _read_json(parser: argparse.ArgumentParser, source: str, label: str) -> Any:
    try:
        if source == "-":
            text = sys.stdin.read()
        else:
            with open(source, encoding="utf-8") as handle:
                text = handle.read()
    except OSError as exc:
        parser.error(f"Failed to read {label}: {exc}")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        parser.error(f"Failed to parse {label} JSON: {exc}")


def _load_subject(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Any:
    payload = _read_json(parser, args.tree, "TREE")
    if args.input == "semantic":
        return payload

    nodes = payload.get("nodes") if isinstance(payload, dict) else payload
    if not isinstance(nodes, list):
        parser.error("--input cdp expects a JSON array of AXNode objects or {\"nodes\": [...]}")
    try:
        return cdp_to_semantic_node(nodes)
    except ValidationError as exc:
        parser.error(f"Invalid CDP payload: {exc}")


def _load_policy(parser: argparse.ArgumentParser, source: Optional[str]) -> Optional[BlessPolicy]:
    if source is None:
        return None
    payload = _read_json(parser, source, "--policy")
    try:
        return BlessPolicy.model_validate(payload)
    except ValidationError as exc:
        parser.error(f"Invalid --policy: {exc}")


def _dump(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _tab_order_payload(tree: SemanticNode) -> list[dict[str, Any]]:
    return [
        {
            "path": target.path,
            "tabIndex": target.tab_index,
            "type": target.node.type,
            "role": target.node.role,
            "name": target.node.name,
        }
        for target in simulate_tab_navigation(tree)
    ]


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(_resolve_log_level(args))

    if args.version:
        try:
            print(version("a11ycore"))
        except PackageNotFoundError:
            print("a11ycore (not installed)")
        return 0

    if args.command == "validate":
        subject = _load_subject(parser, args)
        report = validate(subject)
        _dump(report.model_dump(mode="json"))
        return 0

    if args.command == "bless":
        subject = _load_subject(parser, args)
        policy = _load_policy(parser, args.policy)
        result = bless(subject, policy=policy)
        _dump(result.model_dump(mode="json", include={"ok", "findings"}))
        return 0 if result.ok else 1

    if args.command == "tab-order":
        tree = coerce_tree(_load_subject(parser, args))
        if tree is None:
            parser.error("TREE is not a valid semantic tree")
        _dump(_tab_order_payload(tree))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
