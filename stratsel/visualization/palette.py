"""
Plot Palette

Principles:
1. Three saturated colours carry the roles (chain / block / warning)
2. Everything else is expressed with light fills, alpha and line style
"""

PALETTE = {
    "chain":    "#219EBC",   # Sampled values / traces
    "baseline": "#02304A",   # Reference lines (prior, encompassing)
    "warning":  "#FA8600",   # Empty blocks, cancelled runs
    "fill":     "#90C9E7",   # Interval bands, use with alpha 0.25-0.35
    "accent":   "#FEB705",   # Point markers for estimates
    "aux":      "#136783",   # Secondary series
}

LINE_STYLES = {
    "trace":    {"color": PALETTE["chain"], "linewidth": 0.6, "linestyle": "-"},
    "mean":     {"color": PALETTE["baseline"], "linewidth": 1.5, "linestyle": "--"},
    "warning":  {"color": PALETTE["warning"], "linewidth": 1.5, "linestyle": "-"},
}

FILL_STYLES = {
    "default": {"color": PALETTE["fill"], "alpha": 0.30},
    "light":   {"color": PALETTE["fill"], "alpha": 0.20},
}


def block_color(count: int) -> str:
    """Colour of a block estimate; empty blocks are highlighted"""
    return PALETTE["warning"] if count == 0 else PALETTE["chain"]


def apply_paper_style(ax, grid_alpha: float = 0.3):
    """Apply the shared axes style"""
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.spines['left'].set_color('#666666')
    ax.spines['bottom'].set_color('#666666')
    ax.tick_params(colors='#333333', labelsize=9)
    ax.grid(True, alpha=grid_alpha, linestyle='--', linewidth=0.5)
