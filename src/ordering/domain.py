"""Ordering bounded context: service carts and service orders.

Handles the per-user cart ledger and the service order lifecycle whose
provider responses feed the customer-facing order timeline.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
