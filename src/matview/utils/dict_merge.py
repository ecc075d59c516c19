from copy import deepcopy
from typing import Mapping, Any


def deep_update(base: dict, override: Mapping[str, Any]) -> dict:
    """Return a copy of *base* recursively updated with *override*.

    Nested mappings are merged section by section (``{"modes": {"eps": 2}}``
    only touches ``modes.eps``); any other value replaces the one in the copy.
    ``base`` is left unchanged.
    """
    result = deepcopy(base)
    stack = [(result, override)]
    while stack:
        dst, src = stack.pop()
        for key, value in src.items():
            if isinstance(value, Mapping) and isinstance(dst.get(key), dict):
                stack.append((dst[key], value))
            else:
                dst[key] = deepcopy(value)
    return result
