from __future__ import annotations

import logging
import sys
from typing import List, Optional

from .api import parse_file, run_program
from .errors import BFError, BFSyntaxError

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None, *, prog: Optional[str] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = sys.argv[0]

    if len(argv) != 1:
        print(f"Usage: {prog} filename", file=sys.stderr)
        return 1

    try:
        program = parse_file(argv[0])
    except OSError as exc:
        print(f"Error opening file: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except BFSyntaxError as exc:
        logger.debug("%s", exc.describe())
        print(exc, file=sys.stderr)
        return 1
    except BFError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        run_program(program)
    except BFError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
