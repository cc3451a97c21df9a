"""Tests for ResourceKey value object."""

import pytest

from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey


def test_visit_path_profile():
    key = ResourceKey(kind=ResourceKind.PROFILE, slug="abc123")
    assert key.visit_path() == "/profiles/public/abc123/visit"


def test_visit_path_family():
    key = ResourceKey(kind=ResourceKind.FAMILY, slug="garcia")
    assert key.visit_path() == "/family-profiles/public/garcia/visit"


@pytest.mark.parametrize(
    "slug, segment",
    [
        ("a/b", "a%2Fb"),
        ("x?y#z", "x%3Fy%23z"),
        ("..", ".."),
        ("josé maría", "jos%C3%A9%20mar%C3%ADa"),
    ],
)
def test_visit_path_escapes_slug(slug, segment):
    key = ResourceKey(kind=ResourceKind.PROFILE, slug=slug)
    assert key.visit_path() == f"/profiles/public/{segment}/visit"


def test_same_slug_different_kind_are_distinct():
    a = ResourceKey(kind=ResourceKind.PROFILE, slug="abc")
    b = ResourceKey(kind=ResourceKind.FAMILY, slug="abc")
    assert a != b
    assert len({a, b}) == 2


@pytest.mark.parametrize("slug", ["", "   "])
def test_blank_slug_is_empty(slug):
    assert ResourceKey(kind=ResourceKind.PROFILE, slug=slug).is_empty()


def test_key_is_immutable():
    key = ResourceKey(kind=ResourceKind.PROFILE, slug="abc")
    with pytest.raises(AttributeError):
        key.slug = "other"
