"""Theme colors and the heat palette for the keyboard heatmap."""

from keyheat.core.intensity import BUCKET_COUNT


class HeatColors:
    """Dark dashboard palette."""

    BG_MAIN = "#0f172a"
    CARD_BG = "#1e293b"
    CARD_BORDER = "#334155"

    TEXT_PRIMARY = "#f1f5f9"
    TEXT_SECONDARY = "#cbd5e1"
    TEXT_MUTED = "#94a3b8"

    ACCENT = "#38bdf8"
    ERROR = "#f87171"


# Index-aligned with heat buckets: 0 = never pressed, 15 = hottest.
BUCKET_COLORS: tuple[str, ...] = (
    "#334155",  # none
    "#172554",  # extremely cold
    "#1e3a8a",
    "#1e40af",
    "#1d4ed8",
    "#2563eb",
    "#0e7490",  # cool
    "#06b6d4",
    "#4ade80",  # neutral
    "#facc15",
    "#eab308",
    "#fb923c",  # warm
    "#f97316",
    "#f87171",  # hot
    "#ef4444",
    "#b91c1c",  # extreme
)


def bucket_color(bucket: int) -> str:
    """Fill color for *bucket*, clamped to the palette."""
    return BUCKET_COLORS[max(0, min(BUCKET_COUNT - 1, int(bucket)))]


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
    except (TypeError, ValueError):
        return a


def text_color_for(fill: str) -> str:
    """Dark or light text, whichever reads better on *fill*."""
    try:
        r, g, b = int(fill[1:3], 16), int(fill[3:5], 16), int(fill[5:7], 16)
    except (ValueError, IndexError):
        return HeatColors.TEXT_PRIMARY
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "#0f172a" if luminance > 150 else HeatColors.TEXT_PRIMARY
