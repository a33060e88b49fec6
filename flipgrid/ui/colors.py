"""Theme colors and color utilities for the UI."""


class GridColors:
    """Slate/amber palette for the competition screens."""

    BG = "#f8fafc"
    PANEL_BG = "#ffffff"
    PANEL_BORDER = "#e2e8f0"
    HEADER_BG = "#1e293b"

    PRIMARY = "#2563eb"
    PRIMARY_LIGHT = "#3b82f6"
    DANGER = "#dc2626"
    SUCCESS = "#16a34a"

    CELL_ON = "#fbbf24"
    CELL_ON_BORDER = "#fcd34d"
    CELL_OFF = "#334155"
    CELL_OFF_BORDER = "#475569"
    CELL_OFF_HOVER = "#475569"
    BLIND_COVER = "#0f172a"

    TEXT_PRIMARY = "#1e293b"
    TEXT_SECONDARY = "#64748b"
    TEXT_ON_DARK = "#f8fafc"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b. Malformed input returns *a*."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
