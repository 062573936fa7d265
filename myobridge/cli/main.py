# myobridge/cli/main.py
from __future__ import annotations

from typing import Optional

from myobridge.core.errors import MyoBridgeError

from myobridge.cli.args import parse_args
from myobridge.cli.commands import cmd_check, cmd_kinds


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    try:
        if args.cmd == "kinds":
            return cmd_kinds()
        if args.cmd == "check":
            return cmd_check(config_path=args.config, driver=args.driver)
        return 2
    except MyoBridgeError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
