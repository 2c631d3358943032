from __future__ import annotations

import json
from typing import Any


def is_escaped(text: str, index: int) -> bool:
    backslashes = 0
    pos = index - 1
    while pos >= 0 and text[pos] == "\\":
        backslashes += 1
        pos -= 1
    return (backslashes % 2) == 1


def strip_comments(text: str) -> str:
    """Remove // and /* */ comments that sit outside string literals."""
    result: list[str] = []
    index = 0
    in_string = False
    while index < len(text):
        char = text[index]
        if in_string:
            if char == '"' and not is_escaped(text, index):
                in_string = False
            result.append(char)
            index += 1
            continue
        if char == '"':
            in_string = True
            result.append(char)
            index += 1
            continue
        if text.startswith("//", index):
            end = text.find("\n", index)
            if end == -1:
                break
            index = end
            continue
        if text.startswith("/*", index):
            end = text.find("*/", index + 2)
            if end == -1:
                break
            index = end + 2
            continue
        result.append(char)
        index += 1
    return "".join(result)


def loads(text: str) -> Any:
    return json.loads(strip_comments(text))
