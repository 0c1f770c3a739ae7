"""Static processing rules applied before a save.

These mirror the field-level rules of an entity type:
- required: attribute must be present and non-empty
- default: value applied only when the attribute is absent
- minimum: numeric floor; absent or lower values are raised to it

set_default_values and check_and_correct_minimum_values return a new
record and never mutate their input. check_required_keys only inspects.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from numbers import Real
from typing import Any

from hookchain.core.errors import InvalidFieldType, MissingRequiredField
from hookchain.core.types import Entity


def is_number(value: Any) -> bool:
    """Check if a value is a real number (bool excluded)."""
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)


def is_absent(value: Any) -> bool:
    """Check if a value counts as unset for defaulting purposes."""
    return value is None


def is_present(value: Any) -> bool:
    """Check if a value satisfies a required-key rule.

    Missing kinds: None, False, numeric zero (any real number), NaN, the
    empty string and empty list/tuple/set. Mappings count as present
    even when empty.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    if is_number(value):
        if value != value:  # NaN
            return False
        return value != 0
    return True


def check_required_keys(entity: Entity, required_keys: Iterable[str]) -> None:
    """Raise MissingRequiredField on the first required key that is not present.

    Args:
        entity: The record to inspect
        required_keys: Keys that must be present, in declared order

    Raises:
        MissingRequiredField: Carrying the full list of required keys
    """
    keys = tuple(required_keys)
    for key in keys:
        if not is_present(entity.get(key)):
            raise MissingRequiredField(key, keys)


def set_default_values(entity: Entity, default_values: Mapping[str, Any]) -> Entity:
    """Return a copy of the entity with defaults applied to absent keys.

    A key holding None counts as unset and receives the default.

    Args:
        entity: The record to apply defaults to
        default_values: Mapping of key -> default value

    Returns:
        A new record; keys already holding a value are left unchanged
    """
    result = dict(entity)

    for key, value in default_values.items():
        if is_absent(result.get(key)):
            result[key] = value

    return result


def check_and_correct_minimum_values(
    entity: Entity,
    minimum_values: Mapping[str, Any] | None = None,
) -> Entity:
    """Return a copy of the entity with every floored key at or above its floor.

    Missing keys and values strictly below the floor are set to the floor.
    NaN is treated as below any floor.

    Raises:
        InvalidFieldType: If the key holds a non-number, None included
    """
    result = dict(entity)

    for key, minimum in (minimum_values or {}).items():
        if key not in result:
            result[key] = minimum
            continue

        current = result[key]

        if not is_number(current):
            raise InvalidFieldType(key, current, minimum)

        if current != current or current < minimum:
            result[key] = minimum

    return result
