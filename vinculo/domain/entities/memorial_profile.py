"""MemorialProfile entity — a public memorial page reachable by slug."""

from dataclasses import dataclass
from datetime import datetime

from vinculo.domain.value_objects.enums import ResourceKind


@dataclass
class MemorialProfile:
    id: str
    kind: ResourceKind
    slug: str
    title: str
    is_published: bool = False
    deleted_at: datetime | None = None
    visit_count: int = 0

    def is_public(self) -> bool:
        return self.is_published and self.deleted_at is None
