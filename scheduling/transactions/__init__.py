"""
Atomic Transaction Handlers.

Transaction handlers encapsulate multi-step operations that must execute
atomically (all succeed or all rollback) against PostgreSQL.

Key design principles:
1. Per-date advisory lock around check-then-insert
2. Exclusion constraint as the storage-level backstop
3. Complete rollback on any step failure
4. Logging with trace_id for debugging

Transaction handlers:
- BookingTransaction: Create pending appointments
"""

from scheduling.transactions.booking_transaction import BookingTransaction

__all__ = ["BookingTransaction"]
