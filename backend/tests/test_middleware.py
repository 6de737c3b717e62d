"""
SoulFinder Backend: Middleware Tests
"""

import asyncio

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from soulfinder.middleware.request_id import RequestIDMiddleware
from soulfinder.middleware.timeout import RequestTimeoutMiddleware


def build_app(timeout_seconds: float) -> FastAPI:
    app = FastAPI()

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(2)
        return {"done": True}

    @app.get("/fast")
    async def fast():
        return {"done": True}

    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=timeout_seconds)
    app.add_middleware(RequestIDMiddleware)
    return app


@pytest.mark.asyncio
async def test_slow_request_returns_504():
    transport = ASGITransport(app=build_app(timeout_seconds=0.05))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/slow", headers={"X-Request-ID": "slow01"})

    assert response.status_code == 504
    body = response.json()
    assert body["error"] == "timeout"
    assert body["request_id"] == "slow01"
    assert body["details"]["timeout_seconds"] == 0.05


@pytest.mark.asyncio
async def test_fast_request_passes_through():
    transport = ASGITransport(app=build_app(timeout_seconds=1))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/fast")

    assert response.status_code == 200
    assert len(response.headers["X-Request-ID"]) == 8
