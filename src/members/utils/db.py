"""Schema management for the members domain."""

from protean.domain import Domain
from sqlalchemy import create_engine


def setup_db(domain: Domain):
    """Create tables for the member aggregate and its entities on SQL providers."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in ("sqlite", "postgresql"):
                continue

            engine = create_engine(provider.conn_info["database_uri"])

            # Accessing _dao registers each model with the provider's metadata
            for _, record in [*domain.registry.aggregates.items(), *domain.registry.entities.items()]:
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
