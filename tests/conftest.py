import pytest

from pwvault.vault import Vault


@pytest.fixture()
def vault_file(tmp_path):
    return tmp_path / "passwordVault"


@pytest.fixture()
def vault(vault_file):
    return Vault.open(str(vault_file))
