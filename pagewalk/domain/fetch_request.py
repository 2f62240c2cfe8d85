from typing import Optional


class FetchRequest:
    """Cursor state threaded through one iteration of a paged fetch.

    Created per stream and discarded with it; never shared between streams.
    """

    def __init__(self, query: str, initial_address: Optional[str] = None):
        self.query = query
        self.initial_address = initial_address if initial_address is not None else query
        self.cursor: Optional[str] = None
        self.attempt = 0
        self.page_number = 1

    @property
    def address(self) -> str:
        """Where the current page lives: the initial address, then each cursor."""
        return self.initial_address if self.cursor is None else self.cursor

    @property
    def is_first_page(self) -> bool:
        return self.cursor is None

    def next_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    def advance(self, cursor: str) -> None:
        self.cursor = cursor
        self.attempt = 0
        self.page_number += 1

    def __repr__(self):
        return f"<FetchRequest page={self.page_number} attempt={self.attempt} address={self.address!r}>"
