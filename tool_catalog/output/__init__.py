"""
Output generation for pipeline results.

This package writes the JSON artifacts of a run and renders
the SQL seed script.
"""

from .artifacts import load_clean, write_clean, write_json, write_raw_dump
from .seed import collect_categories, render_seed, sql_literal, write_seed

__all__ = [
    "load_clean",
    "write_clean",
    "write_json",
    "write_raw_dump",
    "collect_categories",
    "render_seed",
    "sql_literal",
    "write_seed",
]
