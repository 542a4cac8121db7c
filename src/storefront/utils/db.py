"""Schema management for SQL-backed providers.

The in-memory provider needs no schema. When ``domain.toml`` points the
default database at PostgreSQL (or SQLite), the User aggregate and its
embedded entities map to tables that must exist before the first request.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    """Force the DAOs of every aggregate and entity on ``provider`` to load.

    Building a DAO registers its SQLAlchemy model on the provider's metadata.
    """
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for all SQL providers of ``domain``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            _register_models(domain, provider)
            provider._metadata.create_all(engine)


def drop_db(domain: Domain) -> None:
    """Drop tables for all SQL providers of ``domain``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
