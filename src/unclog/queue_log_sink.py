import queue

from unclog.diagnostics import logger
from unclog.log_entry import LogEntry


class QueueLogSink:
    """
    Log sink that forwards entries to subscribers through a queue.

    Viewers and tailing tools read from the queue on their own thread.
    This sink never blocks: entries that do not fit are dropped and
    reported on the diagnostic channel.
    """

    def __init__(self, subscriber_queue: queue.Queue):
        self._queue = subscriber_queue

    def emit(self, entry: LogEntry) -> None:
        try:
            self._queue.put_nowait(entry)
        except queue.Full:
            logger.warning(
                "Subscriber queue full; dropped log entry {} ({})",
                entry.identifier,
                entry.datetime,
            )
