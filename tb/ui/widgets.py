"""Dot grid widget.

The grid owns one QLabel per interval and restyles only the dots whose state
actually changed, so the 250 ms active-dot event stays cheap.
"""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QLabel, QSizePolicy, QWidget

from tb.core.grid import GridModel, PENDING
from tb.ui.theme import DOT_SIZE, DOT_SPACING, build_dot_stylesheet

MIN_COLS = 8
MAX_COLS = 16


def column_count(width):
    """Columns for a grid of the given pixel width, between MIN_COLS and MAX_COLS."""
    return max(MIN_COLS, min(MAX_COLS, width // (DOT_SIZE + DOT_SPACING)))


class DotGrid(QWidget):

    def __init__(self, parent=None):
        super().__init__(parent)
        self.model = GridModel()
        self._dots = []
        self._painted = []
        self._cols = MIN_COLS
        self._layout = QGridLayout(self)
        self._layout.setSpacing(DOT_SPACING)
        self._layout.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def build(self, dot_count):
        """Tear down and recreate ``dot_count`` pending dots."""
        while self._layout.count():
            item = self._layout.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()
        self._dots = []
        self._painted = []
        self.model.rebuild(dot_count)

        self._cols = column_count(self.width() or 800)
        for index in range(dot_count):
            dot = QLabel()
            dot.setFixedSize(DOT_SIZE, DOT_SIZE)
            dot.setToolTip(f"Interval {index + 1}/{dot_count}")
            dot.setAccessibleName(f"Interval {index + 1} of {dot_count}")
            dot.setStyleSheet(build_dot_stylesheet(PENDING))
            row, col = divmod(index, self._cols)
            self._layout.addWidget(dot, row, col)
            self._dots.append(dot)
            self._painted.append(PENDING)

    # Renderer hooks, forwarded from the window
    def progress_changed(self, completed, total):
        if total != len(self._dots):
            self.build(total)
        self.model.progress_changed(completed, total)
        self._repaint()

    def active_dot_changed(self, index):
        self.model.active_dot_changed(index)
        self._repaint()

    def _repaint(self):
        for i, state in enumerate(self.model.states()):
            if self._painted[i] != state:
                self._dots[i].setStyleSheet(build_dot_stylesheet(state))
                self._painted[i] = state
