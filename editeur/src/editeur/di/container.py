"""
Dependency Injection Container for Editeur.

Manages all service instances and their dependencies.
"""

import logging
from typing import Optional

from editeur.application.use_cases import (
    ConfirmTopUp,
    GetPayerBalance,
    GetServiceInfo,
    PublishContent,
    RegisterPayer,
)
from editeur.config.settings import Settings
from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.domain.services import (
    IChainReader,
    ILedgerClient,
    IStorageNetwork,
    ReceiptVerifier,
)
from editeur.infrastructure.blockchain import (
    EvmRpcClient,
    SuiKeypair,
    SuiLedgerClient,
    derive_publisher_address,
)
from editeur.infrastructure.persistence import InMemoryCreditLedger
from editeur.infrastructure.storage import WalrusBridgeClient

logger = logging.getLogger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of clients and the credit ledger.
    Collaborators can be passed in to replace the network-backed
    defaults (used by tests).
    """

    def __init__(
        self,
        settings: Settings,
        ledger: Optional[ICreditLedger] = None,
        chain_reader: Optional[IChainReader] = None,
        storage_network: Optional[IStorageNetwork] = None,
        ledger_client: Optional[ILedgerClient] = None,
        publisher_address: Optional[str] = None,
    ):
        """
        Initialize container.

        Args:
            settings: Application settings
            ledger: Credit ledger override
            chain_reader: Chain-A reader override
            storage_network: Storage network override
            ledger_client: Chain-B client override
            publisher_address: Custodial chain-A address override
        """
        self.settings = settings

        # Shared state
        self._ledger: Optional[ICreditLedger] = ledger

        # Collaborators
        self._chain_reader: Optional[IChainReader] = chain_reader
        self._storage_network: Optional[IStorageNetwork] = storage_network
        self._ledger_client: Optional[ILedgerClient] = ledger_client

        # Identity
        self._publisher_address: Optional[str] = publisher_address

    async def shutdown(self) -> None:
        """Close network sessions."""
        if self._chain_reader:
            await self._chain_reader.close()

        if self._storage_network:
            await self._storage_network.close()

        if self._ledger_client:
            await self._ledger_client.close()

    # Identity

    @property
    def publisher_address(self) -> str:
        """Custodial chain-A address derived from EVM_PRIVATE_KEY."""
        if self._publisher_address is None:
            self._publisher_address = derive_publisher_address(
                self.settings.EVM_PRIVATE_KEY
            )
        return self._publisher_address

    # Infrastructure Getters

    @property
    def ledger(self) -> ICreditLedger:
        """Get credit ledger instance."""
        if self._ledger is None:
            self._ledger = InMemoryCreditLedger()
        return self._ledger

    @property
    def chain_reader(self) -> IChainReader:
        """Get chain-A RPC client instance."""
        if self._chain_reader is None:
            self._chain_reader = EvmRpcClient(
                rpc_url=self.settings.EVM_RPC_URL,
                total_timeout=self.settings.EVM_RPC_TIMEOUT,
                max_retries=self.settings.RETRY_MAX_ATTEMPTS,
            )
        return self._chain_reader

    @property
    def storage_network(self) -> IStorageNetwork:
        """Get storage bridge client instance."""
        if self._storage_network is None:
            self._storage_network = WalrusBridgeClient(
                bridge_url=self.settings.STORAGE_BRIDGE_URL,
                total_timeout=self.settings.STORAGE_TIMEOUT,
                max_retries=self.settings.RETRY_MAX_ATTEMPTS,
            )
        return self._storage_network

    @property
    def ledger_client(self) -> ILedgerClient:
        """Get chain-B client instance."""
        if self._ledger_client is None:
            self._ledger_client = SuiLedgerClient(
                keypair=SuiKeypair.from_secret(self.settings.SUI_PRIVATE_KEY),
                network=self.settings.SUI_NETWORK,
                fullnode_url=self.settings.SUI_FULLNODE,
                finality_timeout=self.settings.SUI_FINALITY_TIMEOUT,
            )
        return self._ledger_client

    @property
    def receipt_verifier(self) -> ReceiptVerifier:
        """Get chain-A receipt verifier."""
        return ReceiptVerifier(self.chain_reader)

    # Use Case Getters

    @property
    def register_payer(self) -> RegisterPayer:
        return RegisterPayer(self.ledger, self.publisher_address)

    @property
    def confirm_top_up(self) -> ConfirmTopUp:
        return ConfirmTopUp(
            ledger=self.ledger,
            verifier=self.receipt_verifier,
            publisher_address=self.publisher_address,
            default_min_confirmations=self.settings.DEFAULT_MIN_CONFIRMATIONS,
        )

    @property
    def get_payer_balance(self) -> GetPayerBalance:
        return GetPayerBalance(self.ledger)

    @property
    def publish_content(self) -> PublishContent:
        return PublishContent(
            ledger=self.ledger,
            storage_network=self.storage_network,
            ledger_client=self.ledger_client,
            store_fee=self.settings.STORE_FEE_WEI,
            storage_timeout=self.settings.STORAGE_TIMEOUT,
            finality_timeout=self.settings.SUI_FINALITY_TIMEOUT,
        )

    @property
    def get_service_info(self) -> GetServiceInfo:
        return GetServiceInfo(
            chain_reader=self.chain_reader,
            ledger_client=self.ledger_client,
            publisher_address=self.publisher_address,
            store_fee=self.settings.STORE_FEE_WEI,
        )
