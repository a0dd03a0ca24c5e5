import sys
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from . import storage


class Credential(NamedTuple):
    username: str
    password: str


class VaultError(Exception):
    """A command was refused. The vault is left unchanged."""


class DuplicateEntry(VaultError):
    def __init__(self):
        super().__init__("add: duplicate entry")


class SiteNotFound(VaultError):
    def __init__(self):
        super().__init__("remove: site not found")


class UserNotFound(VaultError):
    def __init__(self):
        super().__init__("remove: user not found")


class MultipleUsers(VaultError):
    def __init__(self):
        super().__init__("attempted to remove multiple users")


class Vault:
    """
    In-memory site -> credentials mapping bound to a backing store.

    Every mutation (replace, delete) rewrites the backing store before it
    returns, so the file always matches memory between commands.

    Usage:
        vault = Vault.open("passwordVault")
        add_credential(vault, "example.com", "alice", "pw1")
        for site, username, password in vault.entries():
            ...
    """

    def __init__(self, path: str, records: Optional[Dict[str, List[Credential]]] = None):
        self.path = path
        self._records: Dict[str, List[Credential]] = {}
        for site, credentials in (records or {}).items():
            if credentials:
                self._records[site] = [Credential(*c) for c in credentials]

    @classmethod
    def open(cls, path: str) -> "Vault":
        return cls(path, storage.load(path))

    def lookup(self, site: str) -> Tuple[List[Credential], bool]:
        credentials = self._records.get(site)
        if credentials is None:
            return [], False
        return list(credentials), True

    def replace(self, site: str, credentials: List[Credential]):
        if credentials:
            self._records[site] = list(credentials)
        else:
            self._records.pop(site, None)
        self.save()

    def delete(self, site: str):
        self._records.pop(site, None)
        self.save()

    def save(self):
        storage.save(self.path, self._records)

    def sites(self) -> List[str]:
        return list(self._records)

    def entries(self) -> Iterator[Tuple[str, str, str]]:
        for site, credentials in self._records.items():
            for username, password in credentials:
                yield site, username, password

    def __contains__(self, site) -> bool:
        return site in self._records

    def __len__(self) -> int:
        return sum(len(c) for c in self._records.values())


def _find(username: str, credentials: List[Credential]) -> int:
    for i, cred in enumerate(credentials):
        if cred.username == username:
            return i
    return -1


def add_credential(vault: Vault, site, username, password):
    credentials, _ = vault.lookup(site)
    if _find(username, credentials) >= 0:
        raise DuplicateEntry()
    credentials.append(Credential(username, password))
    vault.replace(site, credentials)


def remove_credential(vault: Vault, site, username):
    credentials, found = vault.lookup(site)
    if not found:
        raise SiteNotFound()
    idx = _find(username, credentials)
    if idx < 0:
        raise UserNotFound()
    del credentials[idx]
    vault.replace(site, credentials)


def remove_site(vault: Vault, site):
    """Drop a site, but only when it holds a single account."""
    credentials, found = vault.lookup(site)
    if not found:
        raise SiteNotFound()
    if len(credentials) > 1:
        raise MultipleUsers()
    vault.delete(site)


def list_credentials(vault: Vault, out=None):
    out = out or sys.stdout
    rows = list(vault.entries())
    if not rows:
        print("No credentials saved yet.", file=out); return
    w1 = max(4, max(len(r[0]) for r in rows))
    w2 = max(8, max(len(r[1]) for r in rows))
    print(f"{'SITE'.ljust(w1)}  {'USERNAME'.ljust(w2)}  PASSWORD", file=out)
    print("-" * (w1 + w2 + 12), file=out)
    for site, username, password in rows:
        print(f"{site.ljust(w1)}  {username.ljust(w2)}  {password}", file=out)
