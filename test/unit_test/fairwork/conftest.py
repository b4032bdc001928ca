from typing import Callable, Dict, List

import httpx
import pytest

from gto_workforce.fairwork import FairWorkClient

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> FairWorkClient:
    transport = httpx.MockTransport(handler)
    return FairWorkClient(
        "http://mock/api/v1",
        api_key="test-key",
        client=httpx.AsyncClient(transport=transport),
    )


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def routes() -> Dict[str, httpx.Response]:
    """Map of request path to canned response; unknown paths return 404."""
    return {}


@pytest.fixture
def fairwork_client(routes, requests_seen) -> FairWorkClient:
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return routes.get(request.url.path, httpx.Response(404, json={"detail": "not found"}))

    return make_client(handler)
