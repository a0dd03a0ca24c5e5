import os

from .storage import DEFAULT_VAULT


def resolve_vault_path(cli_path=None) -> str:
    """Pick the backing file: --vault, then $PWVAULT_FILE, then ./passwordVault.

    A leading ``~`` is expanded in either of the first two.
    """
    path = cli_path or os.environ.get("PWVAULT_FILE") or DEFAULT_VAULT
    return os.path.expanduser(path)
