"""
Extraction of structured data from generative model output.
"""

from weekend_vibes.extraction.json_array import (
    extract_json_array,
    find_array_span,
    parse_json_array,
    strip_code_fences,
)

__all__ = [
    "extract_json_array",
    "find_array_span",
    "parse_json_array",
    "strip_code_fences",
]
