from PySide6.QtCore import QObject, QTimer


class QtScheduler:
    """Repeating-timer scheduler backed by QTimer. Handles are the QTimer
    objects themselves, parented to ``parent`` so they die with the window."""

    def __init__(self, parent: QObject | None = None):
        self._parent = parent

    def schedule(self, callback, interval_ms):
        timer = QTimer(self._parent)
        timer.timeout.connect(callback)
        timer.start(interval_ms)
        return timer

    def cancel(self, handle):
        handle.stop()
        handle.deleteLater()
