import pytest

from content_tree import ContentTreeService, InMemoryNodeRepository, StoreError

ROOT = "learning_data"
CHILDREN = "children"


class FlakyRepository(InMemoryNodeRepository):
    """In-memory repository that fails on selected calls.

    ``fail_list`` holds collection paths whose listing raises, and
    ``fail_ordered`` makes every ordered listing raise.
    """

    def __init__(self):
        super().__init__()
        self.fail_list = set()
        self.fail_list_once = set()
        self.fail_delete = set()
        self.fail_ordered = False
        self.list_calls = []

    async def list(self, collection_path, order_by=None):
        key = tuple(collection_path)
        self.list_calls.append((key, order_by))
        if key in self.fail_list_once:
            self.fail_list_once.discard(key)
            raise StoreError(f"transient failure listing {'/'.join(key)}")
        if key in self.fail_list:
            raise StoreError(f"cannot list {'/'.join(key)}")
        if order_by and self.fail_ordered:
            raise StoreError("missing index")
        return await super().list(collection_path, order_by)

    async def delete(self, path):
        if tuple(path) in self.fail_delete:
            raise StoreError(f"cannot delete {'/'.join(path)}")
        await super().delete(path)


@pytest.fixture()
def repo():
    return FlakyRepository()


@pytest.fixture()
def service(repo):
    return ContentTreeService(repo)


def category_path(category):
    return (ROOT, category)


def topic_path(category, topic):
    return (ROOT, category, CHILDREN, topic)


def content_path(category, topic, item):
    return (ROOT, category, CHILDREN, topic, CHILDREN, item)


@pytest.fixture()
def seed(repo):
    """Write raw documents straight into the repository."""

    def _seed(path, title, order=0, **extra):
        data = {"title": title, "order": order}
        data.update(extra)
        repo.documents[tuple(path)] = data
        return tuple(path)

    return _seed


@pytest.fixture()
def math_tree(seed):
    """Math → Algebra → Linear Equations."""

    seed(category_path("math"), "Math", icon="calc", colorHex="#ff0000")
    seed(topic_path("math", "algebra"), "Algebra")
    seed(
        content_path("math", "algebra", "linear-equations"),
        "Linear Equations",
        content="<p>y = mx + b</p>",
    )
