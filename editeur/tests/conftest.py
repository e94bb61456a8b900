"""
Test fixtures and configuration.

Collaborators (chain A, chain B, storage network) are replaced by
in-memory fakes; no test touches the network.
"""

import asyncio
import base64
from typing import Any, Dict, List, Optional

import httpx
import pytest

from editeur.config.settings import Settings
from editeur.di.container import DIContainer
from editeur.domain.services import (
    ChainReceipt,
    ChainTransaction,
    IChainReader,
    ILedgerClient,
    IStorageNetwork,
    IWriteFlow,
    StorageFile,
)
from editeur.infrastructure.persistence import InMemoryCreditLedger
from editeur.main import create_app

PAYER = "0x8ba1f109551bd432803012645ac136ddd64dba72"
PAYER_CHECKSUM = "0x8ba1f109551bD432803012645Ac136ddd64DBA72"
OTHER_PAYER = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"
PUBLISHER = "0x1111111111111111111111111111111111111111"
STRANGER = "0x2222222222222222222222222222222222222222"

TX_A = "0x" + "ab" * 32
TX_B = "0x" + "cd" * 32

SUI_OWNER = "0x" + "5" * 64

# Deterministic, never-funded test keys
EVM_TEST_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
SUI_TEST_KEY = "0x" + "01" * 32


# ================================================================
# Fakes
# ================================================================


class FakeChainReader(IChainReader):
    """Chain A as a pair of dicts and a head height."""

    def __init__(self, head: int = 100):
        self.head = head
        self.chain_id = 84532
        self.transactions: Dict[str, ChainTransaction] = {}
        self.receipts: Dict[str, ChainReceipt] = {}
        self.calls: List[str] = []
        self.closed = False

    def add_transfer(
        self,
        tx_hash: str,
        value: int,
        sender: Optional[str] = PAYER,
        recipient: Optional[str] = PUBLISHER,
        block: Optional[int] = 100,
        status: Optional[int] = 1,
        mined: bool = True,
    ) -> None:
        self.transactions[tx_hash] = ChainTransaction(
            tx_hash=tx_hash,
            from_address=sender,
            to_address=recipient,
            value=value,
            block_number=block if mined else None,
        )
        if mined:
            self.receipts[tx_hash] = ChainReceipt(
                tx_hash=tx_hash, status=status, block_number=block
            )

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        self.calls.append("get_transaction")
        return self.transactions.get(tx_hash)

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[ChainReceipt]:
        self.calls.append("get_transaction_receipt")
        return self.receipts.get(tx_hash)

    async def get_block_number(self) -> int:
        self.calls.append("get_block_number")
        return self.head

    async def get_chain_id(self) -> int:
        self.calls.append("get_chain_id")
        return self.chain_id

    async def close(self) -> None:
        self.closed = True


class FakeWriteFlow(IWriteFlow):
    """Write flow recording the order of protocol calls."""

    def __init__(self, network: "FakeStorageNetwork", files: List[StorageFile]):
        self.network = network
        self.files = files
        self._blob_id: Optional[str] = None

    @property
    def blob_id(self) -> Optional[str]:
        return self._blob_id

    async def _step(self, name: str) -> None:
        self.network.calls.append(name)
        delay = self.network.delays.get(name)
        if delay:
            await asyncio.sleep(delay)
        error = self.network.failures.get(name)
        if error is not None:
            raise error

    async def encode(self) -> None:
        await self._step("encode")
        self._blob_id = self.network.blob_id

    async def register(self, epochs: int, owner: str, deletable: bool) -> str:
        await self._step("register")
        self.network.register_args = {
            "epochs": epochs,
            "owner": owner,
            "deletable": deletable,
        }
        return base64.b64encode(b"register-tx").decode()

    async def upload(self, digest: str) -> None:
        await self._step("upload")
        self.network.upload_digest = digest

    async def certify(self) -> str:
        await self._step("certify")
        return base64.b64encode(b"certify-tx").decode()

    async def list_files(self) -> List[Dict[str, Any]]:
        await self._step("list_files")
        return [
            {
                "id": f"{self._blob_id}-{i}",
                "blobId": self._blob_id,
                "identifier": f.identifier,
            }
            for i, f in enumerate(self.files)
        ]


class FakeStorageNetwork(IStorageNetwork):
    """Storage network with injectable per-step failures and delays."""

    def __init__(self, blob_id: str = "blob-xyz"):
        self.blob_id = blob_id
        self.calls: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self.delays: Dict[str, float] = {}
        self.flows: List[FakeWriteFlow] = []
        self.register_args: Optional[dict] = None
        self.upload_digest: Optional[str] = None
        self.closed = False

    async def open_write_flow(self, files: List[StorageFile]) -> IWriteFlow:
        if "open" in self.failures:
            raise self.failures["open"]
        flow = FakeWriteFlow(self, files)
        self.flows.append(flow)
        return flow

    async def close(self) -> None:
        self.closed = True


class FakeLedgerClient(ILedgerClient):
    """Chain-B client that records submissions."""

    def __init__(self):
        self.submitted: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self.delays: Dict[str, float] = {}
        self.closed = False

    @property
    def owner_address(self) -> str:
        return SUI_OWNER

    @property
    def network(self) -> str:
        return "testnet"

    def transaction_digest(self, tx_bytes: str) -> str:
        return "digest-" + base64.b64decode(tx_bytes).decode()

    async def sign_and_execute(self, tx_bytes: str) -> str:
        kind = base64.b64decode(tx_bytes).decode().split("-")[0]
        self.submitted.append(kind)
        delay = self.delays.get(kind)
        if delay:
            await asyncio.sleep(delay)
        if kind in self.failures:
            raise self.failures[kind]
        return self.transaction_digest(tx_bytes)

    async def close(self) -> None:
        self.closed = True


# ================================================================
# Fixtures
# ================================================================


@pytest.fixture
def ledger() -> InMemoryCreditLedger:
    return InMemoryCreditLedger()


@pytest.fixture
def chain_reader() -> FakeChainReader:
    return FakeChainReader()


@pytest.fixture
def storage_network() -> FakeStorageNetwork:
    return FakeStorageNetwork()


@pytest.fixture
def ledger_client() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest.fixture
def settings() -> Settings:
    """Settings built without YAML or environment lookups of required keys."""
    return Settings(
        ENV="test",
        EVM_RPC_URL="http://127.0.0.1:8545",
        EVM_PRIVATE_KEY=EVM_TEST_KEY,
        SUI_PRIVATE_KEY=SUI_TEST_KEY,
        STORE_FEE_WEI=10,
        STORAGE_TIMEOUT=2,
        SUI_FINALITY_TIMEOUT=2,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def container(
    settings, ledger, chain_reader, storage_network, ledger_client
) -> DIContainer:
    """Container wired to the fakes, sharing the ledger fixture."""
    return DIContainer(
        settings,
        ledger=ledger,
        chain_reader=chain_reader,
        storage_network=storage_network,
        ledger_client=ledger_client,
        publisher_address=PUBLISHER,
    )


@pytest.fixture
async def client(container):
    """HTTP client bound to an app built around the fake container."""
    app = create_app(container.settings, container)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
