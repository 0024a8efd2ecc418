from __future__ import annotations


def clampSelection(current: int | None, delta: int, listLength: int) -> int | None:
    if listLength <= 0:
        return None

    newIndex = int(current or 0) + int(delta)
    if newIndex < 0:
        newIndex = 0
    maxIndex = listLength - 1
    if newIndex > maxIndex:
        newIndex = maxIndex
    return newIndex
