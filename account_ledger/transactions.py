"""
Transaction Log Module

Append-only, per-account record of ledger events. Amounts are signed:
positive is an inflow to the entity, negative an outflow.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List
import threading
import uuid

from .money import AmountLike, to_amount


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger event"""
    id: str
    timestamp: datetime
    description: str
    amount: Decimal
    sequence: int  # Insertion order within the owning log

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display"""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "description": self.description,
            "amount": str(self.amount),
            "sequence": self.sequence,
        }


class TransactionLog:
    """
    Append-only transaction history for one account.

    Timestamps come from the wall clock and are not guaranteed monotonic, so
    listings sort by (timestamp, sequence): oldest first, ties in insertion
    order.
    """

    def __init__(self):
        self._entries: List[Transaction] = []
        self._lock = threading.Lock()

    def append(self, description: str, amount: AmountLike) -> Transaction:
        """Append a new transaction and return it"""
        signed_amount = to_amount(amount)
        with self._lock:
            transaction = Transaction(
                id=str(uuid.uuid4()),
                timestamp=datetime.now(timezone.utc),
                description=description,
                amount=signed_amount,
                sequence=len(self._entries),
            )
            self._entries.append(transaction)
        return transaction

    def list(self) -> List[Transaction]:
        """Get all transactions sorted oldest first"""
        with self._lock:
            snapshot = list(self._entries)
        return sorted(snapshot, key=lambda t: (t.timestamp, t.sequence))

    def amounts(self) -> List[Decimal]:
        """Signed amounts in display order"""
        return [t.amount for t in self.list()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.list())
