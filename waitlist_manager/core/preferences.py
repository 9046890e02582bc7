"""Seating preference extraction from free-text special requests."""

import re
from dataclasses import dataclass
from typing import Optional

# "table 5", "Table5", "#5", "# 5"
TABLE_PATTERN = re.compile(r"table\s*(\d+)|#\s*(\d+)")
NEAR_PATTERN = re.compile(r"near\s+(.+)", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedPreference:
    """Structured seating intent extracted from a special request."""

    requested_table_id: Optional[int] = None
    near_guest_name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.requested_table_id is None and self.near_guest_name is None


def parse_special_requests(text: Optional[str]) -> ParsedPreference:
    """
    Extract a requested table id and a "near <guest>" name.

    Both patterns are searched independently, so both may be set. Matching
    is deliberately loose: ``table\\s*\\d+`` also fires inside longer words.
    The guest name keeps its original casing.
    """
    if not text:
        return ParsedPreference()

    requested_table_id = None
    table_match = TABLE_PATTERN.search(text.lower())
    if table_match:
        requested_table_id = int(table_match.group(1) or table_match.group(2))

    near_guest_name = None
    near_match = NEAR_PATTERN.search(text)
    if near_match:
        near_guest_name = near_match.group(1).strip()

    return ParsedPreference(
        requested_table_id=requested_table_id,
        near_guest_name=near_guest_name,
    )
