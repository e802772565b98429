from typing import Any

import httpx
import pytest

PAGES = {
    "/users.json": b'[{"id": 1}, {"id": 2, "name": "x"}]',
}


def _serve(request: httpx.Request) -> httpx.Response:
    if (body := PAGES.get(request.url.path)) is None:
        return httpx.Response(404)
    return httpx.Response(200, content=body)


@pytest.fixture
def client_kwargs(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Serve `PAGES` to every `httpx.Client` and record the arguments it got."""
    calls: list[dict[str, Any]] = []
    real_client = httpx.Client

    def make_client(**kwargs: Any) -> httpx.Client:
        calls.append(kwargs)
        return real_client(transport=httpx.MockTransport(_serve), **kwargs)

    monkeypatch.setattr(httpx, "Client", make_client)
    return calls
