import argparse
import sys

from . import __version__
from . import storage
from . import vault as vt

HELP_TEXT = """\
Commands:
  l                      list all entries
  a site user password   add an entry
  r site                 remove a site (only if it has one user)
  r site user            remove one user from a site
  h                      show this help
  x                      exit"""


class ExitLoop(Exception):
    pass


def cmd_list(vault, args, out):
    vt.list_credentials(vault, out)


def cmd_add(vault, args, out):
    if len(args) != 3:
        print("Usage: a site user password", file=out)
        return
    site, username, password = args
    vt.add_credential(vault, site, username, password)


def cmd_remove(vault, args, out):
    if len(args) == 1:
        vt.remove_site(vault, args[0])
    elif len(args) == 2:
        vt.remove_credential(vault, args[0], args[1])
    else:
        print("Usage: r site [user]", file=out)


def cmd_help(vault, args, out):
    print(HELP_TEXT, file=out)


def cmd_exit(vault, args, out):
    print("Exiting...", file=out)
    raise ExitLoop()


COMMANDS = {
    "l": cmd_list,
    "a": cmd_add,
    "r": cmd_remove,
    "h": cmd_help,
    "?": cmd_help,
    "x": cmd_exit,
}


def dispatch(vault, line: str, out) -> bool:
    """Run one input line. Returns False once the loop should stop."""
    parts = line.split()
    if not parts:
        return True
    func = COMMANDS.get(parts[0])
    if func is None:
        print("Invalid command", file=out)
        return True
    try:
        func(vault, parts[1:], out)
    except vt.VaultError as e:
        print(e, file=out)
    except ExitLoop:
        return False
    return True


def run_loop(vault, stdin=None, stdout=None, stderr=None):
    """Read commands until end of input or ``x``.

    storage.VaultIOError is not handled here; a failed save ends the process.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        for line in stdin:
            if not dispatch(vault, line, stdout):
                return
    except (OSError, UnicodeDecodeError) as e:
        print(f"reading standard input: {e}", file=stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwvault",
        description="Flat-file credential store. Reads commands from stdin.",
        epilog=HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--vault", help=f"Path to vault file (or set PWVAULT_FILE). Default: {storage.DEFAULT_VAULT}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser
