import pytest

from content_tree import CategoryNode, ContentItemNode, StoreError, TopicNode

CHILDREN = "children"


@pytest.mark.asyncio
async def test_empty_store_returns_empty_forest(service):
    assert await service.get_content_tree() == []


@pytest.mark.asyncio
async def test_three_level_tree(service, math_tree):
    tree = await service.get_content_tree()

    assert len(tree) == 1
    math = tree[0]
    assert isinstance(math, CategoryNode)
    assert (math.id, math.title, math.icon, math.color_hex) == ("math", "Math", "calc", "#ff0000")
    assert math.path == ["learning_data", "math"]

    [algebra] = math.children
    assert isinstance(algebra, TopicNode)
    assert algebra.parent_id == "math"
    assert algebra.path == ["learning_data", "math", CHILDREN, "algebra"]

    [linear] = algebra.children
    assert isinstance(linear, ContentItemNode)
    assert linear.content == "<p>y = mx + b</p>"
    assert linear.parent_id == "algebra"
    assert len(linear.path) == 6
    assert not hasattr(linear, "children")


@pytest.mark.asyncio
async def test_siblings_sorted_by_order(service, seed):
    seed(("learning_data", "b"), "B", order=2)
    seed(("learning_data", "a"), "A", order=1)
    seed(("learning_data", "c"), "C", order=0)
    seed(("learning_data", "a", CHILDREN, "late"), "Late", order=5)
    seed(("learning_data", "a", CHILDREN, "early"), "Early", order=1)

    tree = await service.get_content_tree()

    assert [node.id for node in tree] == ["c", "a", "b"]
    assert [topic.id for topic in tree[1].children] == ["early", "late"]


@pytest.mark.asyncio
async def test_childless_nodes_have_empty_children(service, seed):
    seed(("learning_data", "empty"), "Empty")

    [empty] = await service.get_content_tree()

    assert empty.children == []


@pytest.mark.asyncio
async def test_failed_child_collection_degrades_to_childless_node(service, repo, seed, math_tree):
    seed(("learning_data", "physics"), "Physics", order=1)
    seed(("learning_data", "physics", CHILDREN, "optics"), "Optics")
    repo.fail_list.add(("learning_data", "math", CHILDREN))

    math, physics = await service.get_content_tree()

    assert math.children is None
    assert [topic.id for topic in physics.children] == ["optics"]


@pytest.mark.asyncio
async def test_failed_topic_collection_keeps_rest_of_tree(service, repo, math_tree):
    repo.fail_list.add(("learning_data", "math", CHILDREN, "algebra", CHILDREN))

    [math] = await service.get_content_tree()

    assert [topic.id for topic in math.children] == ["algebra"]
    assert math.children[0].children is None


@pytest.mark.asyncio
async def test_ordered_query_failure_falls_back_to_unordered(service, repo, math_tree):
    repo.fail_ordered = True

    [math] = await service.get_content_tree()

    assert math.children[0].children[0].id == "linear-equations"
    assert (("learning_data",), None) in repo.list_calls


@pytest.mark.asyncio
async def test_root_listing_failure_propagates(service, repo, math_tree):
    repo.fail_list.add(("learning_data",))

    with pytest.raises(StoreError):
        await service.get_content_tree()


@pytest.mark.asyncio
async def test_legacy_documents_without_title_or_order(service, seed, repo):
    repo.documents[("learning_data", "legacy")] = {"order": "not-a-number"}

    [legacy] = await service.get_content_tree()

    assert legacy.title == "legacy"
    assert legacy.order == 0


@pytest.mark.asyncio
async def test_mixed_order_values_still_sort(service, repo, seed):
    seed(("learning_data", "numbered"), "Numbered", order=1)
    seed(("learning_data", "unset"), "Unset", order=None)
    seed(("learning_data", "first"), "First", order=0)

    tree = await service.get_content_tree()

    assert [node.id for node in tree] == ["unset", "first", "numbered"]
    assert [node.order for node in tree] == [0, 0, 1]
