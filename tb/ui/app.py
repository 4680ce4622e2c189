import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)
from tb.common.logger import log
from tb.core import config
from tb.core.config import ConfigError, IntervalUnit, RawInputs, TotalUnit
from tb.core.engine import Renderer, TimerEngine
from tb.core.timer_state import Phase
from tb.ui.scheduler import QtScheduler
from tb.ui.theme import build_stylesheet
from tb.ui.widgets import DotGrid
from tb.util.misc import format_duration, now_hms

# Wall-clock readout refresh, independent of the engine's own poll.
CLOCK_MS = 1000

_CUSTOM = "custom"


# Forwards engine events onto the window's widgets.
class _WindowRenderer(Renderer):

    def __init__(self, window):
        self._window = window

    def remaining_changed(self, text):
        self._window.time_left.setText(text)

    def progress_changed(self, completed, total):
        self._window.grid.progress_changed(completed, total)

    def active_dot_changed(self, index):
        self._window.grid.active_dot_changed(index)

    def phase_changed(self, snapshot):
        self._window.sync_buttons(snapshot.phase)


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

class MainWindow(QMainWindow):

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Timer Ball")
        self.setStyleSheet(build_stylesheet())

        self.engine = TimerEngine(scheduler=QtScheduler(self))
        self._renderer = _WindowRenderer(self)

        central = QWidget()
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)

        # -- Readouts --
        top = QHBoxLayout()
        self.current_time = QLabel(now_hms())
        self.current_time.setObjectName("currentTime")
        self.time_left = QLabel(format_duration(config.DEFAULTS.preset))
        self.time_left.setObjectName("timeLeft")
        self.time_left.setAlignment(Qt.AlignCenter)
        top.addWidget(self.current_time)
        top.addStretch(1)
        top.addWidget(self.time_left)
        top.addStretch(1)
        main_lay.addLayout(top)

        # -- Form --
        form = QHBoxLayout()
        self.preset = QComboBox()
        for seconds in config.PRESETS:
            self.preset.addItem(format_duration(seconds), seconds)
        self.preset.addItem("Custom", _CUSTOM)
        form.addWidget(QLabel("Total"))
        form.addWidget(self.preset)

        self.custom_group = QWidget()
        custom_lay = QHBoxLayout(self.custom_group)
        custom_lay.setContentsMargins(0, 0, 0, 0)
        self.custom_value = QSpinBox()
        self.custom_value.setRange(1, 9999)
        self.custom_value.setValue(config.DEFAULTS.custom_quantity)
        self.custom_unit = QComboBox()
        self.custom_unit.addItem("minutes", TotalUnit.MINUTES)
        self.custom_unit.addItem("hours", TotalUnit.HOURS)
        custom_lay.addWidget(self.custom_value)
        custom_lay.addWidget(self.custom_unit)
        self.custom_group.setVisible(False)
        form.addWidget(self.custom_group)

        self.interval_value = QSpinBox()
        self.interval_value.setRange(1, 9999)
        self.interval_value.setValue(config.DEFAULTS.interval_quantity)
        self.interval_unit = QComboBox()
        self.interval_unit.addItem("seconds", IntervalUnit.SECONDS)
        self.interval_unit.addItem("minutes", IntervalUnit.MINUTES)
        form.addWidget(QLabel("Interval"))
        form.addWidget(self.interval_value)
        form.addWidget(self.interval_unit)
        form.addStretch(1)
        main_lay.addLayout(form)

        # -- Buttons --
        buttons = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.pause_btn = QPushButton("Pause")
        self.reset_btn = QPushButton("Reset")
        self.start_btn.clicked.connect(self._on_start)
        self.pause_btn.clicked.connect(self._on_pause)
        self.reset_btn.clicked.connect(self._on_reset)
        buttons.addWidget(self.start_btn)
        buttons.addWidget(self.pause_btn)
        buttons.addWidget(self.reset_btn)
        buttons.addStretch(1)
        main_lay.addLayout(buttons)

        self.summary = QLabel()
        self.summary.setObjectName("gridSummary")
        self.message = QLabel()
        self.message.setObjectName("message")
        main_lay.addWidget(self.summary)
        main_lay.addWidget(self.message)

        # -- Grid --
        self.grid = DotGrid()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.grid)
        main_lay.addWidget(scroll, 1)

        self.preset.currentIndexChanged.connect(self._on_preset_changed)
        for spin in (self.custom_value, self.interval_value):
            spin.valueChanged.connect(self._update_preview)
        for combo in (self.custom_unit, self.interval_unit):
            combo.currentIndexChanged.connect(self._update_preview)

        self.engine.subscribe(self._renderer)
        self.sync_buttons(Phase.IDLE)
        self._update_preview()
        self.resize(900, 600)

        # -- Clock readout (1 s) --
        self._clock_timer = QTimer(self)
        self._clock_timer.timeout.connect(lambda: self.current_time.setText(now_hms()))
        self._clock_timer.start(CLOCK_MS)

    # ------------------------------------------------------------------ #
    #  Form                                                                #
    # ------------------------------------------------------------------ #

    def raw_inputs(self):
        preset = self.preset.currentData()
        return RawInputs(
            preset=None if preset == _CUSTOM else preset,
            custom_quantity=self.custom_value.value(),
            custom_unit=self.custom_unit.currentData(),
            interval_quantity=self.interval_value.value(),
            interval_unit=self.interval_unit.currentData(),
        )

    def _on_preset_changed(self, _index):
        preset = self.preset.currentData()
        is_custom = preset == _CUSTOM
        self.custom_group.setVisible(is_custom)
        if not is_custom:
            suggestion = config.suggested_interval(preset)
            if suggestion is not None:
                qty, unit = suggestion
                self.interval_value.setValue(qty)
                self.interval_unit.setCurrentIndex(self.interval_unit.findData(unit))
        self._update_preview()

    def _update_preview(self, *_):
        self.summary.setText(config.preview(self.raw_inputs()).summary)

    # ------------------------------------------------------------------ #
    #  Commands                                                            #
    # ------------------------------------------------------------------ #

    def _on_start(self):
        raw = self.raw_inputs()
        result = self.engine.configure(config.total_seconds_from_inputs(raw),
                                       config.interval_seconds_from_inputs(raw))
        if isinstance(result, ConfigError):
            log.warning(f"Start rejected ({result.kind.value}): {result.message}")
            self.message.setText(result.message)
            return
        self.message.setText("")
        log.info(f"Starting timer: {result.total_seconds}s total, {result.interval_seconds}s interval, "
                 f"{result.dot_count} dots")
        self.grid.build(result.dot_count)
        self.engine.start(result)

    def _on_pause(self):
        log.info(f"Pause/resume pressed while {self.engine.phase.value}")
        self.engine.pause_or_resume()

    def _on_reset(self):
        log.info("Reset pressed")
        self.engine.reset()

    def sync_buttons(self, phase):
        self.start_btn.setEnabled(phase in (Phase.IDLE, Phase.COMPLETED))
        self.pause_btn.setEnabled(phase in (Phase.RUNNING, Phase.PAUSED))
        self.pause_btn.setText("Continue" if phase == Phase.PAUSED else "Pause")
        self.reset_btn.setEnabled(phase != Phase.IDLE)

    def closeEvent(self, event):
        self.engine.reset()
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
