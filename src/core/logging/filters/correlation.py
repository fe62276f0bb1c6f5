import logging
from contextvars import ContextVar

# Request id of the task currently handling a request; None outside requests.
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the current request's correlation id.

    The id is read from a ContextVar, so concurrent requests on the same event
    loop each see their own id. Records that already carry one are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = correlation_id_var.get()
        if correlation_id and not getattr(record, "correlation_id", None):
            record.correlation_id = correlation_id
        return True
