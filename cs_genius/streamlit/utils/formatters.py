"""
Display helpers for the Streamlit pages.
"""

BAND_COLORS = {"good": "green", "fair": "orange", "poor": "red"}


def band_color(band: str) -> str:
    """Markdown color for an audit score band."""
    return BAND_COLORS.get(band, "gray")


def sentiment_color(is_negative: bool) -> str:
    return "red" if is_negative else "green"
