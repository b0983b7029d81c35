"""Order synchronization bounded context: keeps denormalized order copies convergent.

Reacts to document change events on the marketplace store: mirrors vendor
orders into customer order documents, aggregates instant and recurring
orders into the operations collection, propagates status changes between
the aggregate and its origin, and raises push notifications on the way.
"""

from protean.domain import Domain

from ordersync.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordersync = Domain(name="ordersync")
