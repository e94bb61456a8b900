"""Domain repository interfaces."""

from editeur.domain.repositories.i_credit_ledger import ICreditLedger

__all__ = ["ICreditLedger"]
