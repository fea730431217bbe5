"""Submission state for the fleet and single-instance forms.

A session owns one form and the outcome of its latest submission. Only one
request may be in flight per session: ``submit()`` while ``loading`` raises
SubmissionInProgressError instead of issuing a second call. Each submission
starts from a clean slate and replaces the previous results.

Example:
    async with OptimizerClient(url) as client:
        session = FleetSession(client=client, provider="Azure")
        session.form = session.form.update_component(0, 0, Component("web", 2, 4))
        await session.submit()
        match session.outcome:
            case "error":
                print(session.error)
            case "empty":
                print(NO_RESULTS_MESSAGE)
            case "results":
                ...
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal

from loguru import logger

from fleetopt.client import OptimizerClient
from fleetopt.errors import SubmissionInProgressError, TransportError, ValidationError
from fleetopt.form import WorkloadForm
from fleetopt.request import build_fleet_request, build_single_request
from fleetopt.results import DisplayConfiguration, DisplayInstance, display_fleet, display_single
from fleetopt.types import ALL_REGIONS, OperatingSystem, Payment, Provider

type Outcome = Literal["idle", "loading", "error", "empty", "results"]


@dataclass
class _Submission[R]:
    loading: bool = field(default=False, init=False)
    error: str | None = field(default=None, init=False)
    results: tuple[R, ...] = field(default=(), init=False)
    submitted: bool = field(default=False, init=False)

    @property
    def outcome(self) -> Outcome:
        if self.loading:
            return "loading"
        if self.error is not None:
            return "error"
        if not self.submitted:
            return "idle"
        return "results" if self.results else "empty"

    async def _run(self, attempt: Callable[[], Awaitable[tuple[R, ...]]]) -> tuple[R, ...]:
        if self.loading:
            raise SubmissionInProgressError("A request is already in progress")

        self.loading = True
        self.error = None
        self.results = ()
        try:
            self.results = await attempt()
        except ValidationError as e:
            logger.bind(component="session").info("Submission blocked: {error}", error=e)
            self.error = str(e)
        except TransportError as e:
            logger.bind(component="session").warning("Submission failed: {error}", error=e)
            self.error = e.message
        finally:
            self.loading = False
            self.submitted = True
        return self.results


@dataclass
class FleetSession(_Submission[DisplayConfiguration]):
    """Fleet optimization form plus the state of its last submission."""

    client: OptimizerClient = field(kw_only=True)
    provider: Provider = field(default="AWS", kw_only=True)
    os: OperatingSystem = field(default="linux", kw_only=True)
    payment: Payment = field(default="Spot", kw_only=True)
    region: str | tuple[str, ...] = field(default=ALL_REGIONS, kw_only=True)
    form: WorkloadForm = field(default_factory=WorkloadForm, kw_only=True)

    async def submit(self) -> tuple[DisplayConfiguration, ...]:
        async def attempt() -> tuple[DisplayConfiguration, ...]:
            request = build_fleet_request(self.os, self.payment, self.region, self.form.apps)
            return display_fleet(await self.client.optimize_fleet(self.provider, request))

        return await self._run(attempt)


@dataclass
class SearchSession(_Submission[DisplayInstance]):
    """Single-instance search form plus the state of its last submission."""

    client: OptimizerClient = field(kw_only=True)
    provider: Provider = field(default="AWS", kw_only=True)
    os: OperatingSystem = field(default="linux", kw_only=True)
    payment: Payment = field(default="Spot", kw_only=True)
    region: str = field(default=ALL_REGIONS, kw_only=True)
    vcpus: int = field(default=4, kw_only=True)
    memory: int = field(default=8, kw_only=True)

    async def submit(self) -> tuple[DisplayInstance, ...]:
        async def attempt() -> tuple[DisplayInstance, ...]:
            request = build_single_request(
                self.os, self.payment, self.region, self.vcpus, self.memory
            )
            return display_single(await self.client.search_instances(self.provider, request))

        return await self._run(attempt)
