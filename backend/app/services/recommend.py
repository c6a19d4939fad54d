"""Request-scoped de-duplication for recommended recipes."""

from typing import Any, Iterable, Mapping, TypeVar

T = TypeVar("T")


def _identity(candidate: Any, key: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(key)
    return getattr(candidate, key, None)


def unique_by_id(candidates: Iterable[T], limit: int, key: str = "id") -> list[T]:
    """
    First `limit` candidates with distinct identifiers, keeping first occurrences.
    The seen-set lives only for this call, so concurrent requests never share state.
    """
    if limit <= 0:
        return []
    seen: set = set()
    unique: list[T] = []
    for candidate in candidates:
        ident = _identity(candidate, key)
        if ident in seen:
            continue
        seen.add(ident)
        unique.append(candidate)
        if len(unique) >= limit:
            break
    return unique
