from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Status, body text and Content-Type of one page request."""
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def media_type(self) -> Optional[str]:
        """Content-Type without parameters, lowercased."""
        if self.content_type is None:
            return None
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def is_json(self) -> bool:
        media_type = self.media_type
        return media_type is not None and (media_type == "application/json" or media_type.endswith("+json"))
