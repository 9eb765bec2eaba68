"""Unit tests for the in-memory repository adapters."""

from datetime import datetime, timezone

import pytest

from blogkit.domain.entities import BlogPost, Tag
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.memory import (
    InMemoryBlogRepository,
    InMemoryBlogStore,
    InMemoryTagRepository,
)


@pytest.fixture
def store() -> InMemoryBlogStore:
    return InMemoryBlogStore()


@pytest.fixture
def posts(store: InMemoryBlogStore) -> InMemoryBlogRepository:
    return InMemoryBlogRepository(store)


@pytest.fixture
def tags(store: InMemoryBlogStore) -> InMemoryTagRepository:
    return InMemoryTagRepository(store)


@pytest.mark.asyncio
async def test_returned_posts_are_detached_copies(posts: InMemoryBlogRepository):
    created = await posts.create(BlogPost(id="post-1", title="Original"))
    created.title = "Mutated"

    fetched = await posts.get_by_id("post-1")

    assert fetched.title == "Original"


@pytest.mark.asyncio
async def test_create_keeps_known_tags_in_order(
    posts: InMemoryBlogRepository, tags: InMemoryTagRepository
):
    rust = await tags.create(Tag(name="Rust"))
    go = await tags.create(Tag(name="Go"))

    created = await posts.create(
        BlogPost(id="post-1", title="T", tags=[rust, Tag(name="Unsaved"), go])
    )

    assert [t.name for t in created.tags] == ["Rust", "Go"]


@pytest.mark.asyncio
async def test_post_count_is_derived_from_associations(
    posts: InMemoryBlogRepository, tags: InMemoryTagRepository
):
    go = await tags.create(Tag(name="Go"))
    await posts.create(BlogPost(id="p1", title="One", tags=[go]))
    await posts.create(BlogPost(id="p2", title="Two", tags=[go]))

    assert (await tags.get_by_id(go.id)).post_count == 2

    await posts.delete("p1")

    assert (await tags.get_by_id(go.id)).post_count == 1
    assert await tags.update_post_count(go.id) is True
    assert await tags.update_post_count("ghost") is False


@pytest.mark.asyncio
async def test_deleting_a_tag_detaches_it_from_posts(
    posts: InMemoryBlogRepository, tags: InMemoryTagRepository
):
    go = await tags.create(Tag(name="Go"))
    await posts.create(BlogPost(id="p1", title="One", tags=[go]))

    assert await tags.delete(go.id) is True

    post = await posts.get_by_id("p1")
    assert post.tags == []
    assert await tags.delete(go.id) is False


@pytest.mark.asyncio
async def test_update_unknown_entities_returns_none(
    posts: InMemoryBlogRepository, tags: InMemoryTagRepository
):
    assert await posts.update(BlogPost(id="ghost", title="x")) is None
    assert await tags.update(Tag(id="ghost", name="x")) is None


@pytest.mark.asyncio
async def test_increment_view_count_is_per_call(posts: InMemoryBlogRepository):
    await posts.create(BlogPost(id="p1", title="One"))

    assert await posts.increment_view_count("p1") == 1
    assert await posts.increment_view_count("p1") == 2
    assert await posts.increment_view_count("ghost") is None


@pytest.mark.asyncio
async def test_set_featured_only_touches_flag_and_timestamp(posts: InMemoryBlogRepository):
    await posts.create(BlogPost(id="p1", title="One", content="Body"))
    stamp = datetime(2030, 1, 1, tzinfo=timezone.utc)

    assert await posts.set_featured("p1", True, stamp) is True

    post = await posts.get_by_id("p1")
    assert post.is_featured is True
    assert post.updated_at == stamp
    assert post.content == "Body"
    assert await posts.set_featured("ghost", True, stamp) is False


@pytest.mark.asyncio
async def test_slug_exists_honours_exclusion(posts: InMemoryBlogRepository):
    await posts.create(BlogPost(id="p1", title="One", slug="one"))

    assert await posts.slug_exists("one") is True
    assert await posts.slug_exists("one", exclude_id="p1") is False
    assert (await posts.get_by_slug("one")).id == "p1"


@pytest.mark.asyncio
async def test_tag_names_are_case_insensitive(tags: InMemoryTagRepository):
    created = await tags.create(Tag(name="FastAPI"))

    assert (await tags.get_by_name("FASTAPI")).id == created.id
    assert await tags.name_exists("fastapi") is True
    assert await tags.name_exists("fastapi", exclude_id=created.id) is False
    assert await tags.id_exists(created.id) is True


@pytest.mark.asyncio
async def test_writes_reject_taken_names_and_slugs(
    posts: InMemoryBlogRepository, tags: InMemoryTagRepository
):
    await tags.create(Tag(name="Go"))
    rust = await tags.create(Tag(name="Rust"))
    await posts.create(BlogPost(id="p1", title="One", slug="one"))
    await posts.create(BlogPost(id="p2", title="Two", slug="two"))

    with pytest.raises(ConflictError):
        await tags.create(Tag(name="go"))
    with pytest.raises(ConflictError):
        await tags.update(Tag(id=rust.id, name="GO"))
    with pytest.raises(ConflictError):
        await posts.create(BlogPost(id="p3", title="Three", slug="one"))
    with pytest.raises(ConflictError):
        await posts.update(BlogPost(id="p2", title="Two", slug="one"))

    assert (await posts.get_by_id("p2")).slug == "two"
    assert (await tags.get_by_id(rust.id)).name == "Rust"


@pytest.mark.asyncio
async def test_tags_are_listed_by_name(tags: InMemoryTagRepository):
    for name in ("rust", "Go", "elm"):
        await tags.create(Tag(name=name))

    listed = await tags.get_tags_with_post_count()

    assert [t.name for t in listed] == ["elm", "Go", "rust"]
