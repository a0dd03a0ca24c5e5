import io
import logging
import sys

from .cli import build_parser, run_loop
from . import storage
from . import utils
from .vault import Vault

"""
pwvault — a plain-text, single-user credential store driven by a line loop.
Usage:
    python -m pwvault [--vault FILE] [-v]
Then type commands on stdin:
    a example.com alice pw1
    l
    r example.com alice
    x
"""

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # stored fields are raw bytes; let them pass through the terminal the same way
    for stream in (sys.stdin, sys.stdout):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")
    path = utils.resolve_vault_path(args.vault)
    try:
        vault = Vault.open(path)
        run_loop(vault)
    except storage.VaultIOError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted by user.")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
