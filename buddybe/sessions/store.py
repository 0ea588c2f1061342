"""Collaborators a session creator talks to."""

from typing import Any, Dict, List, Optional, Protocol, Sequence


class SessionStore(Protocol):
    """Where session records are written."""

    async def insert_session(
        self,
        game_type: str,
        fields: Dict[str, Any],
        seats: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Write one session record and its seat rows, all or nothing."""
        ...

    async def fetch_session(self, game_type: str, code: str) -> Optional[Dict[str, Any]]:
        """Return a session record by join code, or None."""
        ...


class WordPool(Protocol):
    """A pre-seeded pool of words (or characters) a game draws from."""

    async def list_words(self) -> Sequence[Any]:
        """Return the identifiers of every entry in the pool."""
        ...
