import pytest

from contracts.network import Account


@pytest.fixture(scope="session")
def algod_client():
    """AlgoKit localnet algod; every test using it is skipped when it is down."""
    from beaker import localnet

    client = localnet.get_algod_client()
    try:
        client.status()
    except Exception as exc:
        pytest.skip(f"localnet not reachable: {exc}")
    return client


@pytest.fixture(scope="session")
def localnet_accounts(algod_client):
    from beaker import localnet

    accounts = [Account(a.address, a.private_key) for a in localnet.get_accounts()]
    if len(accounts) < 3:
        pytest.skip("localnet wallet needs at least 3 funded accounts")
    return accounts


@pytest.fixture(scope="session")
def owner_account(localnet_accounts):
    return localnet_accounts[0]


@pytest.fixture(scope="session")
def heir_account(localnet_accounts):
    return localnet_accounts[1]


@pytest.fixture(scope="session")
def other_account(localnet_accounts):
    return localnet_accounts[2]
