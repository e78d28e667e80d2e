import queue

from unclog.configuration import Configuration
from unclog.file_log_sink import FileLogSink, read_entries
from unclog.log_manager import LogManager, Logger
from unclog.queue_log_sink import QueueLogSink


def main():
    config = Configuration()
    config.set("LogPath", "demo_logs")
    config.set("ApplicationName", "unclog-demo")

    manager = LogManager(config)
    viewer_queue = queue.Queue()
    manager.register_sink(QueueLogSink(viewer_queue))

    log = Logger("unclog-demo", manager)
    log.info("Demo started")
    log.success("Config loaded", {"keys": sorted(config.get_all())})
    log.warning("Cache cold", {"hit_rate": 0.0})
    log.error("Upstream timeout", {"service": "billing", "after_ms": 3000}, severity="Critical")
    log.debug("Raw response", "line one\nline two")

    print(f"\n[Viewer] {viewer_queue.qsize()} entries queued")

    entry = viewer_queue.get_nowait()
    path = FileLogSink().path_for(config.log_directory, entry)
    print(f"[File] {path}")
    for record in read_entries(path):
        print("  ", record["Type"], record["Severity"], record["Head"])

    manager.close()


if __name__ == "__main__":
    main()
