"""
Get Service Info use case.

Describes the custodial identities, networks and fee of this instance.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from editeur.domain.exceptions import ChainUnavailableError
from editeur.domain.services.i_chain_reader import IChainReader
from editeur.domain.services.i_ledger_client import ILedgerClient

logger = logging.getLogger(__name__)


@dataclass
class ServiceInfo:
    """
    Service identity and reachability.

    Attributes:
        status: "healthy", or "degraded" if chain A did not answer
        publisher_address: Custodial chain-A address (checksummed)
        sui_owner: Custodial chain-B address
        sui_network: Chain-B network name
        chain_id: Chain-A chain id (None if unreachable)
        store_fee: Fee per publish in wei
    """

    status: str
    publisher_address: str
    sui_owner: str
    sui_network: str
    chain_id: Optional[int]
    store_fee: int


class GetServiceInfo:
    """Collect service identity; probes chain A for its chain id."""

    def __init__(
        self,
        chain_reader: IChainReader,
        ledger_client: ILedgerClient,
        publisher_address: str,
        store_fee: int,
    ):
        self.chain_reader = chain_reader
        self.ledger_client = ledger_client
        self.publisher_address = publisher_address
        self.store_fee = store_fee

    async def execute(self) -> ServiceInfo:
        """
        Execute info query.

        Returns:
            ServiceInfo, degraded when the chain-id probe fails
        """
        try:
            chain_id = await self.chain_reader.get_chain_id()
            status = "healthy"
        except ChainUnavailableError as e:
            logger.warning(f"Chain A unreachable for health probe: {e.message}")
            chain_id = None
            status = "degraded"

        return ServiceInfo(
            status=status,
            publisher_address=self.publisher_address,
            sui_owner=self.ledger_client.owner_address,
            sui_network=self.ledger_client.network,
            chain_id=chain_id,
            store_fee=self.store_fee,
        )
