"""Log filters referenced from logging.json and logging-dev.json."""

import logging

from gateway.common.tracing import current_request


class ExtraFieldsFilter(logging.Filter):
    """Copy the current RequestContext onto each record.

    ``trace_id`` is always present ("-" outside a request or when the caller
    sent no id) so both formatters can reference it. Inside a request the
    record also gets ECS-style ``trace``, ``url`` and ``http`` fields.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = current_request.get()
        trace_id = context.trace_id if context else None
        record.trace_id = trace_id or "-"

        if context is None:
            return True
        if trace_id:
            record.trace = {"id": trace_id}
        record.url = {"full": context.url}
        record.http = context.http_fields()
        return True


class EndpointFilter(logging.Filter):
    """Drop access lines for one path, e.g. load balancer polls of /health."""

    def __init__(self, path: str):
        super().__init__()
        self._marker = f" {path} "

    def filter(self, record: logging.LogRecord) -> bool:
        return self._marker not in record.getMessage()
