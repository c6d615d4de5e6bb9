"""
Theme constants — colors, chart layout, Bootstrap overrides.
Import from here instead of hardcoding colors anywhere.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
BG = "#111827"
CARD = "#1f2937"
CARD2 = "#273244"
AMBER = "#f59e0b"
GREEN = "#2ecc71"
RED = "#e74c3c"
BLUE = "#3498db"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
TEAL = "#1abc9c"
WHITE = "#ffffff"
GRAY = "#aaaaaa"
DARKGRAY = "#666666"

# ── Expense category colors (pie chart, badges) ─────────────────────────────
CATEGORY_COLORS = {
    "Materials": AMBER,
    "Shipping": BLUE,
    "Marketing": PURPLE,
    "Tools": TEAL,
    "Other": DARKGRAY,
}

STATUS_COLORS = {
    "Pending": "warning",
    "Shipped": "info",
    "Delivered": "success",
}

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": WHITE},
    margin=dict(t=50, b=30, l=60, r=20),
)

# ── Sidebar Dimensions ───────────────────────────────────────────────────────
SIDEBAR_WIDTH = "240px"
CONTENT_MARGIN = "256px"  # sidebar + gap

TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
