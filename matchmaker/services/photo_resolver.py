from typing import Iterable, Optional

DIRECT_URI_PREFIXES = ("http://", "https://", "file://")


class PhotoResolver:
    """Turns stored photo references into displayable URLs"""

    def __init__(self, storage_base_url: Optional[str] = None):
        self.storage_base_url = storage_base_url.rstrip("/") if storage_base_url else None

    def resolve(self, photo_ref: str) -> str:
        if photo_ref.startswith(DIRECT_URI_PREFIXES):
            return photo_ref

        if not self.storage_base_url:
            return photo_ref

        return f"{self.storage_base_url}/{photo_ref.lstrip('/')}"

    def resolve_all(self, photo_refs: Iterable[str]) -> list[str]:
        return [self.resolve(ref) for ref in photo_refs or [] if ref]
