from datetime import UTC, datetime

import pytest
from protean.integrations.pytest import DomainFixture

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def ordersync_bed():
    # Import every element module before the domain is initialized
    import ordersync.fabric  # noqa: F401
    from ordersync.domain import ordersync

    bed = DomainFixture(ordersync)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordersync_bed):
    with ordersync_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _reset_adapters():
    from ordersync.channel import reset_channel
    from ordersync.fabric import reset_fabric
    from ordersync.store import reset_store

    reset_store()
    reset_channel()
    reset_fabric()
    yield
    reset_store()
    reset_channel()
    reset_fabric()


@pytest.fixture()
def store():
    from ordersync.store.memory import InMemoryDocumentStore

    return InMemoryDocumentStore(clock=lambda: FIXED_NOW)


@pytest.fixture()
def push():
    from ordersync.channel.fake_push import FakePushAdapter

    return FakePushAdapter()


@pytest.fixture()
def fabric(store, push):
    """Fabric wired to the in-memory store, which feeds its changes back into the queue."""
    from ordersync.fabric import build_fabric

    return build_fabric(store=store, channel=push)
