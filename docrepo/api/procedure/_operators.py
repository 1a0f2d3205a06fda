"""Update operators as pure transformations of a document's fields.

Operators never mutate their input; each returns a new field mapping.
"""

import copy
from typing import Any

from ..document.Document import Document, FieldKind
from ..errors import OperatorTypeError
from .UpdateCommands import UpdateCommands

Fields = dict[str, Any]


def _array(fields: Fields, operator: str, name: str) -> list[Any]:
    if name not in fields or FieldKind.of(fields[name]) is not FieldKind.ARRAY:
        raise OperatorTypeError(operator, name)
    return fields[name]


def apply_set(fields: Fields, values: dict[str, Any]) -> Fields:
    """The $set operator sets the value of a field."""
    return {**fields, **copy.deepcopy(values)}


def apply_pop(fields: Fields, directions: dict[str, int | float | None]) -> Fields:
    """The $pop operator removes the first (-1) or last (1) element of an array.

    Zero or a missing direction removes the last element. Popping an empty
    array leaves it empty.
    """
    result = dict(fields)
    for name, direction in directions.items():
        array = _array(result, "$pop", name)
        result[name] = array[1:] if direction is not None and direction < 0 else array[:-1]
    return result


def apply_push(fields: Fields, values: dict[str, Any]) -> Fields:
    """The $push operator adds an element to the end of an array."""
    result = dict(fields)
    for name, value in values.items():
        result[name] = [*_array(result, "$push", name), copy.deepcopy(value)]
    return result


def apply_unshift(fields: Fields, values: dict[str, Any]) -> Fields:
    """The $unshift operator adds an element to the beginning of an array."""
    result = dict(fields)
    for name, value in values.items():
        result[name] = [copy.deepcopy(value), *_array(result, "$unshift", name)]
    return result


def apply_update_commands(document: Document, commands: UpdateCommands) -> Document:
    # $set runs first because it may create the arrays the other operators act on.
    fields = apply_set(document.fields, commands.set_fields)
    fields = apply_pop(fields, commands.pop_fields)
    fields = apply_push(fields, commands.push_fields)
    fields = apply_unshift(fields, commands.unshift_fields)
    return document.with_fields(fields)
