"""Command line entry point: ``python -m tableprops validate PROPS.yaml``.

Loads a YAML property bag, validates it, applies it to a default table
metadata record and prints the resulting metadata as JSON.

Exit codes:
  0 = OK
  1 = Invalid properties
  2 = Load/parse errors or bad usage
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .consistency import ReplicationApplicability
from .errors import ConfigError, TablePropsError, format_error
from .metadata import TableMetadata
from .pipeline import TablePropertyDefinitions
from .settings import load_settings

__all__ = ["DeterministicHelpFormatter", "build_parser", "load_properties", "main"]

OK = 0
INVALID = 1
USER_ERR = 2


class DeterministicHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    Help formatter with fixed width/positions so `--help` output is deterministic
    across OS/terminals and independent of runtime terminal width.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("max_help_position", 28)
        kwargs.setdefault("width", 80)
        super().__init__(*args, **kwargs)


def _eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def _stringify(value: Any) -> Any:
    """YAML scalars become the strings a statement parser would have produced."""
    if isinstance(value, Mapping):
        return {str(k): _stringify(v) for k, v in value.items()}
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return None
    return str(value)


def load_properties(path: str) -> Dict[str, Any]:
    """Load a YAML property bag; '-' reads from stdin."""
    if path == "-":
        data = yaml.safe_load(sys.stdin.read())
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level value must be a mapping of table options")
    return {str(k): _stringify(v) for k, v in data.items()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tableprops",
        description="Validate and apply table options",
        formatter_class=DeterministicHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    sp = subparsers.add_parser(
        "validate",
        help="Validate a YAML property bag and print the resulting metadata",
        formatter_class=DeterministicHelpFormatter,
    )
    sp.add_argument("path", help="YAML file of table options. Use '-' for STDIN.")
    sp.add_argument("--keyspace", default="ks", help="Keyspace owning the table.")
    sp.add_argument("--table", default="t", help="Table name.")
    sp.add_argument(
        "--replication",
        default="SimpleStrategy",
        help="Replication strategy of the keyspace, used for consistency checks.",
    )
    sp.add_argument("--settings", default=None, help="YAML settings file.")
    return parser


def _run_validate(ns: argparse.Namespace) -> int:
    try:
        props = load_properties(ns.path)
        settings = load_settings(ns.settings)
    except FileNotFoundError as e:
        _eprint(f"error: file not found: {e.filename or ns.path}")
        return USER_ERR
    except OSError as e:
        _eprint(f"error: cannot read {e.filename or ns.path}: {e.strerror or e}")
        return USER_ERR
    except (yaml.YAMLError, ConfigError) as e:
        _eprint(f"error: failed to load: {e}")
        return USER_ERR

    defs = TablePropertyDefinitions(
        props,
        settings=settings,
        applicability=ReplicationApplicability({ns.keyspace: ns.replication}),
    )
    cfm = TableMetadata(keyspace=ns.keyspace, name=ns.table)
    try:
        defs.validate()
        defs.apply_to_metadata(cfm)
    except TablePropsError as e:
        print("PROPERTIES INVALID\n" + format_error(e))
        return INVALID

    print(json.dumps(cfm.describe(), sort_keys=True, indent=2))
    return OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ns.command == "validate":
        return _run_validate(ns)
    parser.print_help()
    return USER_ERR
