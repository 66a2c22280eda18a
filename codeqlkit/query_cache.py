"""In-memory cache mapping query IDs to resolved `.ql` file paths."""

from collections.abc import Iterable


class ResolvedQueryCache:
    """Query ID -> resolved query path, filled lazily and never invalidated.

    Entries stay valid for the life of the wrapper because query IDs are
    stable for a fixed CLI and pack version.

    Single-writer: there is no lock around the missing()/update() sequence.
    Two threads resolving the same uncached ID both run `resolve queries`
    and the last update wins; the values are identical, so only work is lost.
    """

    def __init__(self):
        self._paths: dict[str, str] = {}

    def __contains__(self, query_id: str) -> bool:
        return query_id in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, query_id: str) -> str | None:
        return self._paths.get(query_id)

    def missing(self, query_ids: Iterable[str]) -> list[str]:
        """Return the uncached IDs in first-seen order, without duplicates."""
        seen = set()
        result = []
        for query_id in query_ids:
            if query_id in self._paths or query_id in seen:
                continue
            seen.add(query_id)
            result.append(query_id)
        return result

    def update(self, pairs: Iterable[tuple[str, str]]) -> None:
        for query_id, path in pairs:
            self._paths[query_id] = path

    def lookup(self, query_ids: Iterable[str]) -> list[str | None]:
        """Return the cached path (or None) for each ID, in order."""
        return [self._paths.get(query_id) for query_id in query_ids]
