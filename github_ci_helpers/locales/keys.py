"""Flattens nested translation objects into dotted keys and diffs them."""

from typing import Any

from github_ci_helpers.locales.models import FlattenedObject


def flatten_object(obj: dict[str, Any]) -> FlattenedObject:
    """Flatten a nested JSON object into a mapping of dotted key-path to leaf value.

    Only dictionaries are descended into. Lists, null and primitive values are
    leaves, so `{"a": {"b": [1, 2]}}` becomes `{"a.b": [1, 2]}`.
    """
    result: FlattenedObject = {}
    for key, value in obj.items():
        if isinstance(value, dict):
            for sub_key, sub_value in flatten_object(value).items():
                result[f"{key}.{sub_key}"] = sub_value
        else:
            result[key] = value
    return result


def values_equal(left: Any, right: Any) -> bool:
    """Compare decoded JSON values, treating booleans and numbers as different types.

    Python considers `True == 1` and `False == 0`, JSON does not.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(values_equal(value, right[key]) for key, value in left.items())
    return left == right


def compute_key_difference(base: FlattenedObject, target: FlattenedObject) -> list[str]:
    """Return the sorted keys of `target` that are missing from `base` or hold a different value.

    Keys only present in `base` are never reported.
    """
    return sorted(key for key, value in target.items() if key not in base or not values_equal(base[key], value))


def compare_objects(base: dict[str, Any], target: dict[str, Any]) -> list[str]:
    """Flatten both objects and return the keys added or changed in `target`."""
    return compute_key_difference(flatten_object(base), flatten_object(target))
