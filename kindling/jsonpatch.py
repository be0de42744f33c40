"""JSON merge patches (RFC 7386) and JSON patches (RFC 6902) on decoded JSON values."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any


class JSONPatchError(ValueError):
    """Raised when a patch is malformed or cannot be applied to a document."""


def merge_patch(document: Any, patch: Any) -> Any:
    """Return document with the merge patch applied; neither input is modified.

    A null document or patch, or a patch that is neither an object nor an
    array, is rejected. An object patch applied to a non-object document,
    and any array patch, replace the document outright with nulls pruned.
    """
    if document is None:
        raise JSONPatchError("invalid JSON document")
    if patch is None:
        raise JSONPatchError("invalid JSON patch")
    if isinstance(patch, dict):
        if isinstance(document, dict):
            return _merge_objects(copy.deepcopy(document), patch)
        return _prune_nulls(patch)
    if isinstance(patch, list):
        return _prune_nulls(patch)
    raise JSONPatchError("invalid JSON patch")


def _prune_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _prune_nulls(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_prune_nulls(item) for item in value]
    return value


def _merge_objects(document: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in patch.items():
        if value is None:
            document.pop(key, None)
            continue
        current = document.get(key)
        if current is None:
            document[key] = _prune_nulls(value)
        else:
            document[key] = _merge_value(current, value)
    return document


def _merge_value(current: Any, value: Any) -> Any:
    if isinstance(value, dict):
        if isinstance(current, dict):
            return _merge_objects(current, value)
        return _prune_nulls(value)
    return copy.deepcopy(value)


def apply_json_patch(document: Any, operations: Any) -> Any:
    """Return document with the RFC 6902 operations applied in order.

    The input document is not modified. Raises JSONPatchError when the
    operations are malformed or one of them does not apply.
    """
    if not isinstance(operations, (list, tuple)):
        raise JSONPatchError("JSON patch must be a list of operations")
    result = copy.deepcopy(document)
    for operation in operations:
        if not isinstance(operation, Mapping):
            raise JSONPatchError(f"invalid operation: {operation!r}")
        kind = operation.get("op")
        handler = _OPERATIONS.get(kind) if isinstance(kind, str) else None
        if handler is None:
            raise JSONPatchError(f"unexpected operation: {kind!r}")
        result = handler(result, operation)
    return result


def _parse_pointer(pointer: str) -> list[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise JSONPatchError(f"invalid JSON pointer: {pointer!r}")
    return [token.replace("~1", "/").replace("~0", "~") for token in pointer[1:].split("/")]


def _path(operation: Mapping[str, Any], key: str = "path") -> list[str]:
    pointer = operation.get(key)
    if not isinstance(pointer, str):
        raise JSONPatchError(f"operation {operation.get('op')!r} is missing {key!r}")
    return _parse_pointer(pointer)


def _value(operation: Mapping[str, Any]) -> Any:
    if "value" not in operation:
        raise JSONPatchError(f"operation {operation.get('op')!r} is missing 'value'")
    return copy.deepcopy(operation["value"])


def _index(token: str, length: int, allow_end: bool) -> int:
    if token == "-" and allow_end:
        return length
    if not (token.isascii() and token.isdigit()) or (len(token) > 1 and token.startswith("0")):
        raise JSONPatchError(f"invalid array index: {token!r}")
    index = int(token)
    if index > length or (index == length and not allow_end):
        raise JSONPatchError(f"array index out of bounds: {index}")
    return index


def _child(container: Any, token: str) -> Any:
    if isinstance(container, dict):
        if token not in container:
            raise JSONPatchError(f"document is missing key: {token!r}")
        return container[token]
    if isinstance(container, list):
        return container[_index(token, len(container), False)]
    raise JSONPatchError(f"cannot traverse into value at {token!r}")


def _resolve(document: Any, tokens: list[str]) -> Any:
    for token in tokens:
        document = _child(document, token)
    return document


def _add(document: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent = _resolve(document, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        parent[key] = value
    elif isinstance(parent, list):
        parent.insert(_index(key, len(parent), True), value)
    else:
        raise JSONPatchError(f"cannot add to value at {key!r}")
    return document


def _remove(document: Any, tokens: list[str]) -> Any:
    if not tokens:
        raise JSONPatchError("cannot remove the whole document")
    parent = _resolve(document, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        if key not in parent:
            raise JSONPatchError(f"document is missing key: {key!r}")
        return parent.pop(key)
    if isinstance(parent, list):
        return parent.pop(_index(key, len(parent), False))
    raise JSONPatchError(f"cannot remove from value at {key!r}")


def _op_add(document: Any, operation: Mapping[str, Any]) -> Any:
    return _add(document, _path(operation), _value(operation))


def _op_remove(document: Any, operation: Mapping[str, Any]) -> Any:
    _remove(document, _path(operation))
    return document


def _op_replace(document: Any, operation: Mapping[str, Any]) -> Any:
    tokens = _path(operation)
    value = _value(operation)
    if not tokens:
        return value
    parent = _resolve(document, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        if key not in parent:
            raise JSONPatchError(f"replace does not apply: document is missing key {key!r}")
        parent[key] = value
    elif isinstance(parent, list):
        parent[_index(key, len(parent), False)] = value
    else:
        raise JSONPatchError(f"cannot replace value at {key!r}")
    return document


def _op_move(document: Any, operation: Mapping[str, Any]) -> Any:
    source = _path(operation, "from")
    target = _path(operation)
    if source == target:
        _resolve(document, source)
        return document
    if len(target) > len(source) and target[: len(source)] == source:
        raise JSONPatchError("cannot move a value into one of its own children")
    value = _remove(document, source)
    return _add(document, target, value)


def _op_copy(document: Any, operation: Mapping[str, Any]) -> Any:
    source = _path(operation, "from")
    target = _path(operation)
    value = copy.deepcopy(_resolve(document, source))
    return _add(document, target, value)


def _op_test(document: Any, operation: Mapping[str, Any]) -> Any:
    tokens = _path(operation)
    if "value" not in operation:
        raise JSONPatchError("operation 'test' is missing 'value'")
    if not _json_equal(_resolve(document, tokens), operation["value"]):
        raise JSONPatchError(f"testing value {operation.get('path')!r} failed")
    return document


def _json_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(_json_equal(left[k], right[k]) for k in left)
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(map(_json_equal, left, right))
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return False
    return left == right


_OPERATIONS: dict[str, Callable[[Any, Mapping[str, Any]], Any]] = {
    "add": _op_add,
    "remove": _op_remove,
    "replace": _op_replace,
    "move": _op_move,
    "copy": _op_copy,
    "test": _op_test,
}