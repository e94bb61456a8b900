"""
Editeur - cross-chain credit ledger and storage publisher.
"""

__version__ = "0.1.0"
