"""Persistence gateways used in create mode."""

from fixture_factory.backends.active_record import ActiveRecordGateway
from fixture_factory.backends.base import PersistenceGateway
from fixture_factory.backends.direct import PostgresGateway

__all__ = ["ActiveRecordGateway", "PersistenceGateway", "PostgresGateway"]
