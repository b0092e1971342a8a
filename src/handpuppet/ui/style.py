"""QSS dark theme for the window chrome (the canvas paints its own background)."""

COLORS = {
    "bg": "#0a0b0e",
    "surface": "#12141a",
    "border": "#252830",
    "text": "#e8e9ed",
    "text_dim": "#8b8e99",
    "accent": "#4fd1c5",
    "accent2": "#f6ad55",
}

DARK_THEME = """
/* ── Global ── */
QMainWindow, QWidget {
    background-color: %(bg)s;
    color: %(text)s;
    font-family: -apple-system, "Segoe UI", "Helvetica Neue", Arial, sans-serif;
    font-size: 12px;
}

QLabel {
    color: %(text)s;
    background: transparent;
    padding: 0px;
}

QLabel#sectionLabel {
    color: %(accent)s;
    font-size: 10px;
    font-weight: 600;
    letter-spacing: 1px;
    padding: 4px 0px 2px 0px;
    border-bottom: 1px solid %(accent)s;
    margin-top: 8px;
    margin-bottom: 4px;
}

/* ── Monitor ── */
QWidget#monitorPanel {
    background-color: %(surface)s;
    border-left: 1px solid %(border)s;
}

QLabel#valueLabel {
    font-family: "SF Mono", "Fira Code", "Consolas", monospace;
    font-size: 10px;
    color: %(accent2)s;
}

QLabel#sliderLabel {
    font-size: 11px;
    color: %(text_dim)s;
}

/* ── QStatusBar ── */
QStatusBar {
    background-color: %(bg)s;
    border-top: 1px solid %(border)s;
    color: %(text_dim)s;
    font-size: 10px;
    font-family: "SF Mono", "Fira Code", "Consolas", monospace;
    padding: 2px 8px;
}

QStatusBar::item {
    border: none;
}
""" % COLORS

