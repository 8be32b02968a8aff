"""
Account Ledger

A multi-account banking ledger: savings, fixed deposits, loans, debit and
credit cards with append-only transaction histories and per-account locking.
All monetary values use Decimal.
"""

__version__ = "1.0.0"
