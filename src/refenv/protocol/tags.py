# src/refenv/protocol/tags.py

"""
Tag strings of the reference shell output protocol.

The table is built once at import time and never modified.
"""

START_TAG = "<#TEST CASE"
END_TAG = ">"
SIZE_TAG = "<#TEST CASES SIZE>"
DONE_TAG = "<#TEST CASES DONE>"

FIELD_NAMES: tuple[str, ...] = (
    "PASSED",
    "NAME",
    "EXPECTED",
    "ACTUAL",
    "DESCRIPTION",
    "REASON",
    "BUGNUMBER",
)

FIELD_TAGS: tuple[str, ...] = tuple(f"{START_TAG} {name}{END_TAG}" for name in FIELD_NAMES)

# 🔼⚙️
