"""Async client for the remote optimization service.

Example:
    async with OptimizerClient("http://localhost:5000") as client:
        configurations = await client.optimize_fleet("AWS", request)
        instances = await client.search_instances("Azure", single_request)

One call, one attempt: there is no retry, and no timeout unless one is
configured.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from fleetopt.errors import FALLBACK_MESSAGE, TransportError
from fleetopt.infra.http import HttpClient, HttpError
from fleetopt.results import decode_fleet_results, decode_single_results
from fleetopt.routing import endpoint_for
from fleetopt.types import (
    FleetRequest,
    FleetResult,
    Operation,
    Provider,
    SingleInstanceRequest,
    SingleInstanceResult,
)

DEFAULT_API_URL = "http://localhost:5000"


class OptimizerClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float | None = None,
        http: HttpClient | None = None,
    ) -> None:
        self._http = http or HttpClient(base_url, timeout=timeout)
        self._log = logger.bind(component="optimizer")

    async def _post(self, provider: Provider, operation: Operation, body: dict[str, Any]) -> Any:
        endpoint = endpoint_for(provider, operation)
        self._log.debug("POST {endpoint} body={body}", endpoint=endpoint, body=body)
        try:
            return await self._http.request("POST", endpoint, json=body)
        except HttpError as e:
            self._log.warning(
                "{operation} request to {endpoint} failed: {error}",
                operation=operation, endpoint=endpoint, error=e,
            )
            status = e.status or None
            raise TransportError(e.message or FALLBACK_MESSAGE, status=status) from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            self._log.warning("Response from {endpoint} is not JSON", endpoint=endpoint)
            raise TransportError(FALLBACK_MESSAGE) from e

    async def optimize_fleet(
        self, provider: Provider, request: FleetRequest
    ) -> tuple[FleetResult, ...]:
        """Fleet configurations for the request, cheapest first as ranked by the service.

        Raises:
            TransportError: The call failed or the body is not a list of fleet results.
        """
        self._log.info(
            "Optimizing fleet on {provider}: {apps} app(s), region={region}",
            provider=provider, apps=len(request.apps), region=request.region,
        )
        raw = await self._post(provider, "fleet", request.to_wire())
        results = decode_fleet_results(raw)
        self._log.info("Received {n} fleet configuration(s)", n=len(results))
        return results

    async def search_instances(
        self, provider: Provider, request: SingleInstanceRequest
    ) -> tuple[SingleInstanceResult, ...]:
        """Instance types matching a single vCPU/memory shape.

        Raises:
            TransportError: The call failed or the body is not a list of instances.
        """
        self._log.info(
            "Searching {provider} instances: {vcpus} vCPU / {memory} GB, region={region}",
            provider=provider, vcpus=request.vcpus, memory=request.memory,
            region=request.selected_region,
        )
        raw = await self._post(provider, "single", request.to_wire())
        results = decode_single_results(raw)
        self._log.info("Received {n} instance(s)", n=len(results))
        return results

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> OptimizerClient:
        await self._http.__aenter__()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
