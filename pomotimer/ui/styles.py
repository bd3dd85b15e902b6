"""QSS stylesheet and phase colours for PomoTimer."""

from __future__ import annotations

from ..timer.engine import Phase

# ── phase accent colours ─────────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK:        "#FF6B6B",   # warm coral
    Phase.SHORT_BREAK: "#4ECDC4",   # cool teal
    Phase.LONG_BREAK:  "#A18CD1",   # calm purple
    Phase.IDLE:        "#7A7A9A",   # neutral dim
}

# ── palette ──────────────────────────────────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#CBA6F7",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "success":      "#A6E3A1",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    /* ── history list ────────────────────────────── */
    QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
        padding: 4px;
    }}

    QListWidget::item {{
        padding: 6px 8px;
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}
    """
