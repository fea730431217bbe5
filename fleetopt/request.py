"""Turn form state into optimization request payloads.

Validation is all-or-nothing: one incomplete Component anywhere blocks the
whole submission with a single message.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from fleetopt.errors import ValidationError
from fleetopt.types import (
    App,
    Behavior,
    Component,
    FleetRequest,
    OperatingSystem,
    Payment,
    SingleInstanceRequest,
    as_region,
)

INCOMPLETE_COMPONENTS_MESSAGE = "Please fill in all required component fields"
INVALID_SHAPE_MESSAGE = "vCPUs and memory must be positive"


def is_complete(component: Component) -> bool:
    """A Component can be submitted once it has a name, vCPUs and memory."""
    return bool(component.name) and component.vcpus > 0 and component.memory > 0


def validate_apps(apps: Iterable[App]) -> None:
    """Raise ValidationError if any Component of any App is incomplete."""
    if any(not is_complete(c) for app in apps for c in app.components):
        raise ValidationError(INCOMPLETE_COMPONENTS_MESSAGE)


def normalize_apps(apps: Sequence[App]) -> tuple[App, ...]:
    """Renumber Apps positionally and drop incomplete Components."""
    return tuple(
        replace(
            app,
            app=f"App{index + 1}",
            components=tuple(c for c in app.components if is_complete(c)),
        )
        for index, app in enumerate(apps)
    )


def build_fleet_request(
    os: OperatingSystem,
    payment: Payment,
    region: str | Sequence[str],
    apps: Sequence[App],
    *,
    filter_instances: Sequence[str] | None = None,
    architecture: str | None = None,
    type_major: Sequence[str] | None = None,
) -> FleetRequest:
    """Validate the Apps and build a normalized fleet request.

    Args:
        os: Target operating system.
        payment: ``"Spot"`` or ``"onDemand"``.
        region: A region, several regions, or ``"all"``.
        apps: Apps as edited by the user. Labels are ignored; the request
            names them ``App1``, ``App2``, ... in order.
        filter_instances: Instance types the optimizer should restrict to.
        architecture: CPU architecture hint.
        type_major: Instance family hints.

    Returns:
        The request to send.

    Raises:
        ValidationError: Some Component is missing its name, vCPUs or memory.
    """
    validate_apps(apps)
    normalized = normalize_apps(apps)
    if any(not app.components for app in normalized):
        raise ValidationError(INCOMPLETE_COMPONENTS_MESSAGE)

    return FleetRequest(
        selected_os=os,
        payment=payment,
        region=as_region(region),
        apps=normalized,
        filter_instances=tuple(filter_instances) if filter_instances else None,
        architecture=architecture,
        type_major=tuple(type_major) if type_major else None,
    )


def build_single_request(
    os: OperatingSystem,
    payment: Payment,
    region: str,
    vcpus: int,
    memory: int,
    *,
    size: int | None = None,
    iops: int | None = None,
    throughput: int | None = None,
    network: int | None = None,
    behavior: Behavior | None = None,
    frequency: int | None = None,
    storage_type: str | None = None,
    burstable: bool | None = None,
) -> SingleInstanceRequest:
    """Build a single-instance search request.

    Raises:
        ValidationError: vcpus or memory is not positive.
    """
    if vcpus <= 0 or memory <= 0:
        raise ValidationError(INVALID_SHAPE_MESSAGE)

    return SingleInstanceRequest(
        selected_os=os,
        payment=payment,
        selected_region=region,
        vcpus=vcpus,
        memory=memory,
        size=size,
        iops=iops,
        throughput=throughput,
        network=network,
        behavior=behavior,
        frequency=frequency,
        storage_type=storage_type,
        burstable=burstable,
    )


def to_payload(request: FleetRequest | SingleInstanceRequest) -> dict[str, Any]:
    """JSON body for a request."""
    return request.to_wire()
