"""
Utility package exports
"""

from cs_genius.utils.helpers import generate_item_id, today_iso, parse_item_date, coerce_app, clean_string_list

__all__ = ["generate_item_id", "today_iso", "parse_item_date", "coerce_app", "clean_string_list"]
