"""Typed view over parsed JSON values and a depth-bounded visitor.

Scanning and patching share :func:`walk` so both passes visit the same nodes
in the same order.
"""

from enum import Enum
from typing import Any, Callable, Iterator, NamedTuple, Optional, Tuple, Union

Path = Tuple[Union[str, int], ...]

DEFAULT_MAX_DEPTH = 30


class JsonKind(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    # bool is a subclass of int, check it first
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


CONTAINER_KINDS = (JsonKind.OBJECT, JsonKind.ARRAY)


def children(value: Any) -> Iterator[Tuple[Union[str, int], Any]]:
    """Yield ``(key, child)`` pairs of an object or array; scalars have none."""
    kind = kind_of(value)
    if kind is JsonKind.OBJECT:
        yield from value.items()
    elif kind is JsonKind.ARRAY:
        yield from enumerate(value)


def _is_container(value: Any) -> bool:
    return kind_of(value) in CONTAINER_KINDS


class Visit(NamedTuple):
    node: Any
    path: Path
    depth: int


def walk(root: Any, max_depth: int = DEFAULT_MAX_DEPTH,
         on_limit: Optional[Callable[[Path], None]] = None) -> Iterator[Visit]:
    """Pre-order traversal of ``root``.

    A container found at ``max_depth`` is yielded but not descended into;
    ``on_limit`` is called once with its path. Sibling subtrees continue.
    A value that is not JSON raises ``TypeError``.
    """
    yield from _walk(root, (), 0, max_depth, on_limit)


def _walk(node, path, depth, max_depth, on_limit):
    yield Visit(node, path, depth)
    if not _is_container(node):
        return
    if depth >= max_depth:
        if on_limit is not None and any(True for _ in children(node)):
            on_limit(path)
        return
    for key, child in children(node):
        yield from _walk(child, path + (key,), depth + 1, max_depth, on_limit)


def format_path(path: Path) -> str:
    """``("a", 0, "b")`` -> ``"a[0].b"``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "<root>"
