import logging


class CorrelationFormatter(logging.Formatter):
    """Prefixes messages with a short request id when the record carries one."""

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            record.msg = f"[{correlation_id[:8]}] {record.msg}"
        return super().format(record)
