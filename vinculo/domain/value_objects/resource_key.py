"""ResourceKey value object — immutable (kind, slug) pair."""

from dataclasses import dataclass
from urllib.parse import quote

from vinculo.domain.value_objects.enums import ResourceKind


@dataclass(frozen=True)
class ResourceKey:
    kind: ResourceKind
    slug: str

    def is_empty(self) -> bool:
        return not self.slug or not self.slug.strip()

    def visit_path(self) -> str:
        """Route of the public increment endpoint, relative to the API base."""
        return f"/{self.kind.value}/public/{quote(self.slug, safe='')}/visit"

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.slug}"
