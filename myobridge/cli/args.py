# myobridge/cli/args.py
from __future__ import annotations

import argparse
from typing import Optional

DEFAULT_CONFIG = "myobridge.yml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="myobridge")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("kinds", help="Show native event tags and the observer kinds they notify.")

    pc = sub.add_parser("check", help="Load config and open the configured native library.")
    pc.add_argument("--config", default=DEFAULT_CONFIG, help=f"YAML config file (default: {DEFAULT_CONFIG}).")
    pc.add_argument(
        "--driver",
        default=None,
        help="Override native.driver from the config file.",
    )

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
