"""Tests for the SQLAlchemy repository adapters against in-memory SQLite."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from blogkit.application.services import BlogService, TagService
from blogkit.domain.entities import BlogPost, Tag
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.database import create_engine, create_schema, create_session_factory
from blogkit.infrastructure.database.repositories import (
    SQLAlchemyBlogRepository,
    SQLAlchemyTagRepository,
)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_engine("sqlite:///:memory:")
    await create_schema(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'blog.db'}")
    await create_schema(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def posts(session_factory) -> SQLAlchemyBlogRepository:
    return SQLAlchemyBlogRepository(session_factory)


@pytest.fixture
def tags(session_factory) -> SQLAlchemyTagRepository:
    return SQLAlchemyTagRepository(session_factory)


def _post(post_id: str, title: str, **kwargs) -> BlogPost:
    return BlogPost(id=post_id, title=title, slug=post_id, **kwargs)


@pytest.mark.asyncio
async def test_create_and_get_post_with_ordered_tags(posts, tags):
    rust = await tags.create(Tag(name="Rust", color="#DEA584"))
    go = await tags.create(Tag(name="Go"))

    created = await posts.create(_post("p1", "Hello", content="Body", tags=[rust, go]))

    assert created.title == "Hello"
    assert [t.name for t in created.tags] == ["Rust", "Go"]
    assert created.tags[0].post_count == 1
    assert created.created_at.tzinfo is not None

    by_slug = await posts.get_by_slug("p1")
    assert by_slug is not None
    assert by_slug.id == "p1"


@pytest.mark.asyncio
async def test_unknown_tag_ids_are_skipped_on_create(posts, tags):
    go = await tags.create(Tag(name="Go"))

    created = await posts.create(_post("p1", "Hello", tags=[go, Tag(name="Unsaved")]))

    assert [t.id for t in created.tags] == [go.id]


@pytest.mark.asyncio
async def test_update_replaces_fields_and_tags(posts, tags):
    go = await tags.create(Tag(name="Go"))
    rust = await tags.create(Tag(name="Rust"))
    await posts.create(_post("p1", "Hello", tags=[go]))

    updated = await posts.update(_post("p1", "Renamed", tags=[rust]))

    assert updated.title == "Renamed"
    assert [t.name for t in updated.tags] == ["Rust"]
    assert await posts.update(_post("ghost", "x")) is None


@pytest.mark.asyncio
async def test_delete_post(posts, tags):
    go = await tags.create(Tag(name="Go"))
    await posts.create(_post("p1", "Hello", tags=[go]))

    assert await posts.delete("p1") is True
    assert await posts.get_by_id("p1") is None
    assert await posts.delete("p1") is False
    assert (await tags.get_by_id(go.id)).post_count == 0


@pytest.mark.asyncio
async def test_get_posts_filters_and_paginates(posts, tags):
    go = await tags.create(Tag(name="Go"))
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(5):
        await posts.create(
            _post(
                f"rust-{i}",
                f"Rust tip {i}",
                author="Ferris",
                created_at=base + timedelta(days=i),
            )
        )
    await posts.create(_post("go-1", "Channels", content="rust-free", tags=[go], is_featured=True))

    page = await posts.get_posts(page=1, page_size=2, search_term="RUST")
    assert page.total_count == 6
    assert len(page.items) == 2
    assert page.has_next_page is True

    by_author = await posts.get_posts(author="ferris", sort_by="createdAt", sort_order="asc")
    assert [p.id for p in by_author.items] == [f"rust-{i}" for i in range(5)]

    by_tag = await posts.get_posts(tag="go")
    assert [p.id for p in by_tag.items] == ["go-1"]

    featured = await posts.get_posts(is_featured=True)
    assert [p.id for p in featured.items] == ["go-1"]


@pytest.mark.asyncio
async def test_search_escapes_like_wildcards(posts):
    await posts.create(_post("p1", "100% coverage"))
    await posts.create(_post("p2", "1000 coverage"))

    result = await posts.search_posts("100%")

    assert [p.id for p in result.items] == ["p1"]


@pytest.mark.asyncio
async def test_recent_and_featured_posts(posts):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(3):
        await posts.create(
            _post(f"p{i}", f"Post {i}", is_featured=i != 1, created_at=base + timedelta(days=i))
        )

    recent = await posts.get_recent_posts(limit=2)
    featured = await posts.get_featured_posts(limit=5)

    assert [p.id for p in recent] == ["p2", "p1"]
    assert [p.id for p in featured] == ["p2", "p0"]


@pytest.mark.asyncio
async def test_increment_view_count_is_atomic_update(posts):
    await posts.create(_post("p1", "Hello"))

    assert await posts.increment_view_count("p1") == 1
    assert await posts.increment_view_count("p1") == 2
    assert (await posts.get_by_id("p1")).view_count == 2
    assert await posts.increment_view_count("ghost") is None


@pytest.mark.asyncio
async def test_set_featured(posts):
    await posts.create(_post("p1", "Hello", content="Body"))
    stamp = datetime(2030, 1, 1, tzinfo=timezone.utc)

    assert await posts.set_featured("p1", True, stamp) is True

    post = await posts.get_by_id("p1")
    assert post.is_featured is True
    assert post.updated_at == stamp
    assert post.content == "Body"
    assert await posts.set_featured("ghost", True, stamp) is False


@pytest.mark.asyncio
async def test_slug_exists(posts):
    await posts.create(_post("p1", "Hello"))

    assert await posts.slug_exists("p1") is True
    assert await posts.slug_exists("p1", exclude_id="p1") is False


@pytest.mark.asyncio
async def test_tag_names_are_case_insensitive(tags):
    created = await tags.create(Tag(name="FastAPI"))

    assert (await tags.get_by_name("fastapi")).id == created.id
    assert await tags.name_exists("FASTAPI") is True
    assert await tags.name_exists("fastapi", exclude_id=created.id) is False
    assert await tags.id_exists(created.id) is True
    assert await tags.id_exists("ghost") is False


@pytest.mark.asyncio
async def test_update_and_delete_tag(posts, tags):
    go = await tags.create(Tag(name="Go"))
    await posts.create(_post("p1", "Hello", tags=[go]))

    renamed = await tags.update(Tag(id=go.id, name="Golang", color="#00ADD8"))
    assert (renamed.name, renamed.color, renamed.post_count) == ("Golang", "#00ADD8", 1)
    assert await tags.update(Tag(id="ghost", name="x")) is None

    assert await tags.delete(go.id) is True
    assert (await posts.get_by_id("p1")).tags == []
    assert await tags.delete(go.id) is False


@pytest.mark.asyncio
async def test_paginated_tags(tags):
    for name in ("Python", "pydantic", "Rust"):
        await tags.create(Tag(name=name))

    page = await tags.get_tags_paginated(page=1, page_size=10, search_term="PY")
    everything = await tags.get_tags_with_post_count()

    assert [t.name for t in page.items] == ["pydantic", "Python"]
    assert page.total_count == 2
    assert [t.name for t in everything] == ["pydantic", "Python", "Rust"]


@pytest.mark.asyncio
async def test_tag_association_set_semantics(posts, tags):
    go = await tags.create(Tag(name="Go"))
    rust = await tags.create(Tag(name="Rust"))
    await posts.create(_post("p1", "Hello"))

    assert await tags.add_tags_to_post("p1", [go.id]) is True
    assert await tags.add_tags_to_post("p1", [go.id, rust.id]) is True
    assert [t.name for t in await tags.get_tags_by_post("p1")] == ["Go", "Rust"]

    assert await tags.add_tags_to_post("p1", ["ghost-tag"]) is False
    assert await tags.add_tags_to_post("ghost", [go.id]) is False

    assert await tags.remove_tags_from_post("p1", [go.id, "ghost-tag"]) is True
    assert [t.name for t in await tags.get_tags_by_post("p1")] == ["Rust"]
    assert await tags.remove_tags_from_post("ghost", [rust.id]) is False


@pytest.mark.asyncio
async def test_sort_by_title_and_author_ignores_case(posts):
    await posts.create(_post("p1", "Banana", author="bob"))
    await posts.create(_post("p2", "apple", author="Carol"))
    await posts.create(_post("p3", "Cherry", author="alice"))

    by_title = await posts.get_posts(sort_by="title", sort_order="asc")
    by_author = await posts.get_posts(sort_by="author", sort_order="desc")

    assert [p.title for p in by_title.items] == ["apple", "Banana", "Cherry"]
    assert [p.author for p in by_author.items] == ["Carol", "bob", "alice"]


@pytest.mark.asyncio
async def test_duplicate_tag_name_raises_conflict(tags):
    await tags.create(Tag(name="Go"))

    with pytest.raises(ConflictError):
        await tags.create(Tag(name="Go"))
    with pytest.raises(ConflictError):
        await tags.create(Tag(name="go"))

    assert [t.name for t in await tags.get_tags_with_post_count()] == ["Go"]


@pytest.mark.asyncio
async def test_renaming_tag_to_taken_name_raises_conflict(tags):
    await tags.create(Tag(name="Go"))
    rust = await tags.create(Tag(name="Rust"))

    with pytest.raises(ConflictError):
        await tags.update(Tag(id=rust.id, name="GO"))

    assert (await tags.get_by_id(rust.id)).name == "Rust"


@pytest.mark.asyncio
async def test_duplicate_slug_raises_conflict_on_create_and_update(posts):
    await posts.create(_post("p1", "Hello"))
    await posts.create(_post("p2", "World"))

    with pytest.raises(ConflictError):
        await posts.create(BlogPost(id="p3", title="Copy", slug="p1"))
    with pytest.raises(ConflictError):
        await posts.update(BlogPost(id="p2", title="World", slug="p1"))

    assert await posts.get_by_id("p3") is None
    assert (await posts.get_by_id("p2")).slug == "p2"


@pytest.mark.asyncio
async def test_concurrent_tag_creation_yields_one_tag_and_one_conflict(file_session_factory):
    repository = SQLAlchemyTagRepository(file_session_factory)
    service = TagService(repository)

    results = await asyncio.gather(
        service.create_tag(Tag(name="Go")),
        service.create_tag(Tag(name="Go")),
        return_exceptions=True,
    )

    assert sum(isinstance(r, Tag) for r in results) == 1
    assert sum(isinstance(r, ConflictError) for r in results) == 1
    assert [t.name for t in await repository.get_tags_with_post_count()] == ["Go"]


@pytest.mark.asyncio
async def test_concurrent_posts_with_same_title_get_distinct_slugs(file_session_factory):
    service = BlogService(SQLAlchemyBlogRepository(file_session_factory))

    first, second = await asyncio.gather(
        service.create_post(BlogPost(title="Hello")),
        service.create_post(BlogPost(title="Hello")),
    )

    assert {first.slug, second.slug} == {"hello", "hello-2"}
