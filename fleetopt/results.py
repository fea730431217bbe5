"""Decode optimizer responses and shape them for display.

Responses are decoded according to the operation that produced them, never
by looking at the payload shape. Results keep the order the service sent
them in (it ranks by price); display only truncates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fleetopt.errors import MalformedResponseError
from fleetopt.types import FleetResult, Instance, Operation, SingleInstanceResult

MAX_FLEET_CONFIGURATIONS = 10
MAX_SINGLE_INSTANCES = 20

NO_RESULTS_MESSAGE = "No results found. Try adjusting your requirements."


# =============================================================================
# Tagged results
# =============================================================================


@dataclass(frozen=True, slots=True)
class FleetResults:
    configurations: tuple[FleetResult, ...]

    @property
    def empty(self) -> bool:
        return not self.configurations


@dataclass(frozen=True, slots=True)
class SingleResults:
    instances: tuple[SingleInstanceResult, ...]

    @property
    def empty(self) -> bool:
        return not self.instances


type Results = FleetResults | SingleResults


def _decode_list[T](raw: Any, decode: Callable[[Mapping[str, Any]], T], kind: str) -> tuple[T, ...]:
    if not isinstance(raw, list):
        raise MalformedResponseError(
            f"Expected a list of {kind} results, got {type(raw).__name__}"
        )
    try:
        return tuple(decode(item) for item in raw)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(f"Malformed {kind} result: {e!r}") from e


def decode_fleet_results(raw: Any) -> tuple[FleetResult, ...]:
    return _decode_list(raw, FleetResult.from_wire, "fleet")


def decode_single_results(raw: Any) -> tuple[SingleInstanceResult, ...]:
    return _decode_list(raw, SingleInstanceResult.from_wire, "single-instance")


def decode_results(kind: Operation, raw: Any) -> Results:
    match kind:
        case "fleet":
            return FleetResults(decode_fleet_results(raw))
        case "single":
            return SingleResults(decode_single_results(raw))
        case _:
            raise ValueError(f"Unknown result kind: {kind!r}")


# =============================================================================
# Display model
# =============================================================================


@dataclass(frozen=True, slots=True)
class DisplayInstance:
    """One instance row, ready to render."""

    type_name: str
    region: str
    cpu: str
    memory: str
    network: str
    price: float  # what the instance costs per hour in this result
    spot_price: float
    on_demand_price: float
    discount_badge: str | None
    components_summary: str | None  # comma-separated component names
    interruption_frequency: str | None = None


@dataclass(frozen=True, slots=True)
class DisplayConfiguration:
    """One ranked fleet configuration."""

    rank: int
    price: float
    region: str
    instances: tuple[DisplayInstance, ...]


def format_price(price: float) -> str:
    return f"${price:.4f}"


def discount_badge(discount: float) -> str | None:
    """Badge text, shown only for a strictly positive discount."""
    if discount > 0:
        return f"{discount:g}% discount"
    return None


def components_summary(instance: Instance) -> str | None:
    if instance.components is None:
        return None
    return ", ".join(c.component_name for c in instance.components)


def _fleet_instance(instance: Instance) -> DisplayInstance:
    return DisplayInstance(
        type_name=instance.type_name,
        region=instance.region,
        cpu=instance.cpu,
        memory=instance.memory,
        network=instance.network,
        price=instance.spot_price,
        spot_price=instance.spot_price,
        on_demand_price=instance.on_demand_price,
        discount_badge=discount_badge(instance.discount),
        components_summary=components_summary(instance),
        interruption_frequency=instance.interruption_frequency,
    )


def _single_instance(result: SingleInstanceResult) -> DisplayInstance:
    return DisplayInstance(
        type_name=result.type_name,
        region=result.region,
        cpu=result.cpu,
        memory=result.memory,
        network=result.network,
        price=result.total_price,
        spot_price=result.spot_price,
        on_demand_price=result.on_demand_price,
        discount_badge=discount_badge(result.discount),
        components_summary=None,
        interruption_frequency=result.interruption_frequency,
    )


def display_fleet(results: tuple[FleetResult, ...]) -> tuple[DisplayConfiguration, ...]:
    return tuple(
        DisplayConfiguration(
            rank=rank,
            price=result.price,
            region=result.region,
            instances=tuple(_fleet_instance(i) for i in result.instances),
        )
        for rank, result in enumerate(results[:MAX_FLEET_CONFIGURATIONS], start=1)
    )


def display_single(results: tuple[SingleInstanceResult, ...]) -> tuple[DisplayInstance, ...]:
    return tuple(_single_instance(r) for r in results[:MAX_SINGLE_INSTANCES])


def interpret_fleet_results(raw: Any) -> tuple[DisplayConfiguration, ...]:
    """Raw fleet response to at most 10 display configurations, in server order."""
    return display_fleet(decode_fleet_results(raw))


def interpret_single_results(raw: Any) -> tuple[DisplayInstance, ...]:
    """Raw single-instance response to at most 20 display rows, in server order."""
    return display_single(decode_single_results(raw))
