"""Glyphs and styles for the textual lane graph."""

# One character per lane column
COMMIT = "*"
THROUGH = "|"
CONVERGE = "/"
DIVERGE = "\\"
EMPTY = " "

# Rich styles for each glyph
GLYPH_STYLES = {
    COMMIT: "green",
    THROUGH: "blue",
    CONVERGE: "magenta",
    DIVERGE: "magenta",
}


def get_glyph_style(glyph: str) -> str:
    """Get the style for a graph glyph (empty for spaces)."""
    return GLYPH_STYLES.get(glyph, "")
