# inventory/signals.py

"""
======================================================
PATH: inventory/signals.py
======================================================
INVENTORY TRANSITION SIGNALS

Sent by InventoryTransaction.save() on a real status *transition* only,
synchronously and inside the same database transaction as the status write.
A receiver that raises rolls the status change back with it.

Keyword arguments:
- instance:        the InventoryTransaction (already saved)
- previous_status: persisted status before this save (None for new rows)
"""

from django.dispatch import Signal

# pending/new -> approved
inventory_transaction_approved = Signal()

# approved -> voided
inventory_transaction_voided = Signal()
