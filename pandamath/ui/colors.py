"""Theme palettes and color utilities for the UI."""

from pandamath.core.themes import Theme


class PandaColors:
    """Soft black-and-white bamboo palette."""

    BG_TOP = "#f5f7f2"
    BG_BOTTOM = "#dfe8d5"

    PRIMARY = "#2e3b32"
    PRIMARY_LIGHT = "#5b6e5f"
    ACCENT = "#7cb342"

    TEXT_PRIMARY = "#1f2a22"
    TEXT_MUTED = "#78909c"


class SquirtleColors:
    """Light blue water palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    ACCENT = "#ffb74d"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_MUTED = "#78909c"


CORRECT = "#43a047"
INCORRECT = "#e53935"
CARD_BG = "rgba(255, 255, 255, 0.85)"


def palette_for(theme: Theme) -> type:
    return PandaColors if theme is Theme.PANDA else SquirtleColors


def tone_color(tone: str) -> str:
    return CORRECT if tone == "correct" else INCORRECT


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
