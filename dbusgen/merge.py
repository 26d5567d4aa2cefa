"""Combining and filtering interface sets gathered from several sources."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import InvalidConfiguration
from .logging import get_logger
from .models import Interface

logger = get_logger("merge")


def merge(existing: Sequence[Interface], incoming: Iterable[Interface]) -> List[Interface]:
    """Append incoming interfaces whose name is not present yet; first seen wins."""
    merged = list(existing)
    seen = {iface.name for iface in merged}
    for iface in incoming:
        if iface.name in seen:
            logger.debug("Skipping duplicate interface %s", iface.name)
            continue
        seen.add(iface.name)
        merged.append(iface)
    return merged


def merge_all(chunks: Iterable[Sequence[Interface]]) -> List[Interface]:
    merged: List[Interface] = []
    for chunk in chunks:
        merged = merge(merged, chunk)
    return merged


def filter_interfaces(
    interfaces: Sequence[Interface],
    *,
    only: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> List[Interface]:
    """Keep the named interfaces (``only``) or drop them (``exclude``)."""
    if only and exclude:
        raise InvalidConfiguration("cannot combine only and except interface filters")
    if only:
        wanted = set(only)
        return [iface for iface in interfaces if iface.name in wanted]
    if exclude:
        unwanted = set(exclude)
        return [iface for iface in interfaces if iface.name not in unwanted]
    return list(interfaces)


__all__ = ["filter_interfaces", "merge", "merge_all"]
