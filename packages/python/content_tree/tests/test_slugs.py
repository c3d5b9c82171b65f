import pytest

from content_tree import InMemoryNodeRepository, generate_unique_id, slugify


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Mathematics", "mathematics"),
        ("Linear Equations", "linear-equations"),
        ("  Hello,  World! ", "hello-world"),
        ("snake_case title", "snake-case-title"),
        ("--Already--hyphenated--", "already-hyphenated"),
        ("Café & Crème", "caf-crme"),
        ("C++ / C#", "c-c"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


@pytest.mark.asyncio
async def test_sequential_ids_follow_suffix_pattern():
    repo = InMemoryNodeRepository()
    collection = ("learning_data",)
    ids = []
    for _ in range(4):
        node_id = await generate_unique_id(repo, "Algebra Basics", collection)
        assert (await repo.get(collection + (node_id,))) is None
        await repo.set(collection + (node_id,), {"title": "Algebra Basics"})
        ids.append(node_id)

    assert ids == ["algebra-basics", "algebra-basics-1", "algebra-basics-2", "algebra-basics-3"]


@pytest.mark.asyncio
async def test_siblings_in_other_collections_do_not_collide():
    repo = InMemoryNodeRepository()
    await repo.set(("learning_data", "math", "children", "intro"), {"title": "Intro"})

    node_id = await generate_unique_id(repo, "Intro", ("learning_data", "physics", "children"))

    assert node_id == "intro"


@pytest.mark.asyncio
async def test_falls_back_to_timestamp_after_max_attempts():
    repo = InMemoryNodeRepository()
    collection = ("learning_data",)
    await repo.set(collection + ("topic",), {})
    for index in range(1, 3):
        await repo.set(collection + (f"topic-{index}",), {})

    node_id = await generate_unique_id(
        repo, "Topic", collection, max_attempts=3, clock=lambda: 1700000000.5
    )

    assert node_id == "topic-1700000000500"


@pytest.mark.asyncio
async def test_blank_slug_uses_default():
    repo = InMemoryNodeRepository()

    assert await generate_unique_id(repo, "!!!", ("learning_data",)) == "untitled"
