"""Zero values and defaults for JSON-to-object mapping."""

import datetime

ZERO_DATETIME = datetime.datetime.min
"""Value assigned to a datetime member bound to a JSON null."""

ZERO_DATE = datetime.date.min
"""Value assigned to a date member bound to a JSON null."""

ALIAS_METADATA_KEY = "json"
"""Dataclass field metadata key naming the member's JSON key."""
