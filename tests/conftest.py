from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from fleetopt.client import OptimizerClient


@dataclass
class Call:
    path: str
    body: Any
    headers: dict[str, str]


@dataclass
class FakeOptimizer:
    """Stands in for the optimization service. Replies per endpoint path."""

    replies: dict[str, tuple[int, Any]] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    delay: float = 0.0

    def reply(self, path: str, body: Any, status: int = 200) -> None:
        self.replies[path] = (status, body)

    def paths(self) -> list[str]:
        return [c.path for c in self.calls]


def make_app(optimizer: FakeOptimizer) -> web.Application:
    app = web.Application()

    async def endpoint(request: web.Request) -> web.Response:
        body = await request.json() if request.can_read_body else None
        optimizer.calls.append(Call(request.path, body, dict(request.headers)))
        status, reply = optimizer.replies.get(request.path, (404, {"message": "no route"}))
        if optimizer.delay:
            await asyncio.sleep(optimizer.delay)
        if isinstance(reply, bytes):
            return web.Response(status=status, body=reply, content_type="application/json")
        if isinstance(reply, str):
            return web.Response(status=status, text=reply)
        return web.json_response(reply, status=status)

    app.router.add_post("/{name}", endpoint)
    return app


@pytest.fixture
def optimizer() -> FakeOptimizer:
    return FakeOptimizer()


@pytest.fixture
async def server(optimizer: FakeOptimizer):
    srv = TestServer(make_app(optimizer))
    await srv.start_server()
    yield srv
    await srv.close()


@pytest.fixture
def base_url(server: TestServer) -> str:
    return f"http://{server.host}:{server.port}"


@pytest.fixture
async def client(base_url: str):
    async with OptimizerClient(base_url) as c:
        yield c


def instance_json(
    type_name: str = "m5.large",
    *,
    spot_price: float = 0.0416,
    discount: float = 54,
    components: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "typeName": type_name,
        "region": "us-east-1",
        "cpu": "2",
        "memory": "8",
        "network": "Up to 10 Gigabit",
        "os": "linux",
        "typeMajor": "m5",
        "typeMinor": "large",
        "onDemandPrice": 0.096,
        "spot_price": spot_price,
        "discount": discount,
        "interruption_frequency": "<5%",
    }
    if components is not None:
        data["components"] = components
    return data


def fleet_json(price: float = 0.0832, region: str = "us-east-1", instances: int = 2) -> dict[str, Any]:
    return {
        "price": price,
        "region": region,
        "instances": [
            instance_json(
                components=[{"appName": "App1", "componentName": f"c{i}"}],
            )
            for i in range(instances)
        ],
    }


def single_json(type_name: str = "c5.xlarge", total_price: float = 0.07) -> dict[str, Any]:
    return {**instance_json(type_name), "total_price": total_price}
