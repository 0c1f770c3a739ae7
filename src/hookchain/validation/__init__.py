"""hookchain processing rules.

Rules applied by every HookClass before a save:
- required keys: must be present and non-empty
- default values: applied to absent keys only
- minimum values: numeric floors, absent or lower values are raised

Usage:
    from hookchain.validation import set_default_values, check_required_keys

    record = set_default_values(record, {"status": "pending"})
    check_required_keys(record, ["owner"])
"""

from hookchain.validation.rules import (
    check_and_correct_minimum_values,
    check_required_keys,
    is_absent,
    is_number,
    is_present,
    set_default_values,
)

__all__ = [
    "check_and_correct_minimum_values",
    "check_required_keys",
    "is_absent",
    "is_number",
    "is_present",
    "set_default_values",
]
