"""Paged repository scans for the Members domain."""

from protean.utils.globals import current_domain

_BATCH_SIZE = 100


def fetch_all(aggregate_cls, **filters):
    dao = current_domain.repository_for(aggregate_cls)._dao

    records = []
    offset = 0
    while True:
        queryset = dao.query.filter(**filters) if filters else dao.query
        batch = queryset.order_by("id").offset(offset).limit(_BATCH_SIZE).all()
        records.extend(batch.items)
        if len(batch.items) < _BATCH_SIZE:
            return records
        offset += _BATCH_SIZE
