import logging
import os
from typing import Dict, List, Optional, Tuple

log = logging.getLogger(__name__)

DEFAULT_VAULT = "passwordVault"

# fields are opaque bytes; undecodable ones round-trip as lone surrogates
ENCODING = "utf-8"
ERRORS = "surrogateescape"


class VaultIOError(Exception):
    """Reading or writing the backing store failed. Not recoverable."""


def parse_line(line: str) -> Optional[Tuple[str, str, str]]:
    parts = line.split()
    if len(parts) != 3:
        return None
    return parts[0], parts[1], parts[2]


def format_line(site: str, username: str, password: str) -> str:
    # no escaping: a field with whitespace in it will not survive a reload
    return f"{site} {username} {password}\n"


def load(path: str) -> Dict[str, List[Tuple[str, str]]]:
    """Read the backing store into a site -> [(username, password), ...] dict.

    A missing file is an empty vault. Lines that do not split into exactly
    three fields are skipped.
    """
    try:
        f = open(path, "r", encoding=ENCODING, errors=ERRORS)
    except FileNotFoundError:
        log.debug("no vault at %s, starting empty", path)
        return {}
    except OSError as exc:
        raise VaultIOError(f"Error opening file: {exc}") from exc

    records: Dict[str, List[Tuple[str, str]]] = {}
    skipped = 0
    with f:
        try:
            for line in f:
                fields = parse_line(line)
                if fields is None:
                    skipped += 1
                    continue
                site, username, password = fields
                records.setdefault(site, []).append((username, password))
        except OSError as exc:
            raise VaultIOError(f"Error reading file: {exc}") from exc

    if skipped:
        log.debug("skipped %d malformed line(s) in %s", skipped, path)
    log.debug("loaded %d site(s) from %s", len(records), path)
    return records


def save(path: str, records) -> None:
    """Rewrite the whole backing store from ``records``.

    The content is encoded before the file is truncated, so a field that
    cannot be written leaves the previous file intact.
    """
    try:
        data = "".join(
            format_line(site, username, password)
            for site, credentials in records.items()
            for username, password in credentials
        ).encode(ENCODING, ERRORS)
    except UnicodeError as exc:
        raise VaultIOError(f"Error writing to file: {exc}") from exc

    parent = os.path.dirname(path)
    try:
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise VaultIOError(f"Error writing to file: {exc}") from exc
    log.debug("wrote %d site(s) to %s", len(records), path)
