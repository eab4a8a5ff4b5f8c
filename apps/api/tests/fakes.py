import copy
from typing import Any, Dict, List, Optional, Tuple

from config import StoreIdentity

TEST_IDENTITY = StoreIdentity(project_id="demo123", dataset="production", api_version="2023-10-01")


class FakeArchive:
    """Call-counting stand-in for QueryCache, answering catalog queries by name.

    List answers are sliced by the query's offset/limit window the way the
    store would slice an ordered result set.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ):
        self.responses = dict(responses or {})
        self.errors = dict(errors or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def fetch(self, query):
        self.calls.append((query.name, dict(query.params)))
        if query.name in self.errors:
            raise self.errors[query.name]
        result = self.responses.get(query.name)
        if callable(result):
            result = result(query.params)
        if isinstance(result, list) and "offset" in query.params:
            start = query.params["offset"]
            result = result[start:start + query.params["limit"]]
        return copy.deepcopy(result)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


class CountingClient:
    """ContentStoreClient stand-in that counts network calls."""

    def __init__(self, result: Any = None, identity: StoreIdentity = TEST_IDENTITY):
        self.identity = identity
        self.result = result
        self.calls = 0
        self.fail_with: Optional[Exception] = None

    def query(self, groq, params=None):
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return copy.deepcopy(self.result)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_photos(count: int, prefix: str = "photo") -> List[Dict[str, Any]]:
    return [
        {
            "_id": f"{prefix}-{i}",
            "slug": f"{prefix}-{i}",
            "title": f"Photo {i}",
            "thumb": {"asset": {"url": f"https://cdn.example.org/{prefix}-{i}.jpg"}, "alt": f"Alt {i}"},
            "dateNote": "1920s",
        }
        for i in range(count)
    ]
