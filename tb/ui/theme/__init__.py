"""Theme: colors and stylesheet generation."""

THEME = {
    "background": "#1f2430",
    "surface": "#2a3040",
    "text": "#eef1f6",
    "muted_text": "#9aa3b5",
    "error_text": "#ff8a80",
    "button_bg": "#3a4257",
    "button_hover": "#48526b",
    "button_disabled_text": "#6b7386",
    "dot_pending": "#2ecc71",
    "dot_active": "#f1c40f",
    "dot_done": "#e74c3c",
    "dot_border": "#151922",
    "active_ring": "#ffffff",
}

DOT_SIZE = 52
DOT_SPACING = 18


def build_stylesheet(t=THEME):
    return f"""
        QWidget {{ background-color: {t["background"]}; color: {t["text"]}; }}
        QLabel#timeLeft {{ font-size: 40px; font-weight: bold; }}
        QLabel#currentTime {{ color: {t["muted_text"]}; }}
        QLabel#gridSummary {{ color: {t["muted_text"]}; }}
        QLabel#message {{ color: {t["error_text"]}; }}
        QPushButton {{
            background-color: {t["button_bg"]};
            border: none; border-radius: 4px; padding: 6px 14px;
        }}
        QPushButton:hover {{ background-color: {t["button_hover"]}; }}
        QPushButton:disabled {{ color: {t["button_disabled_text"]}; }}
        QComboBox, QSpinBox {{ background-color: {t["surface"]}; padding: 3px; }}
    """


# Stylesheet for a single dot in one of its three states: pending, active or done.
def build_dot_stylesheet(state, t=THEME):
    fill = {
        "pending": t["dot_pending"],
        "active": t["dot_active"],
        "done": t["dot_done"],
    }[state]
    border = t["active_ring"] if state == "active" else t["dot_border"]
    radius = DOT_SIZE // 2
    return (f"background-color: {fill}; border: 3px solid {border}; "
            f"border-radius: {radius}px;")
