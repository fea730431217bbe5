"""Workload and result types for fleet optimization.

Requests mirror the JSON bodies the optimization service accepts; results
mirror what it returns. Python attribute names are snake_case, wire keys are
kept in ``to_wire`` / ``from_wire``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

type Provider = Literal["AWS", "Azure", "Hybrid"]
type Operation = Literal["fleet", "single"]
type OperatingSystem = Literal["linux", "windows"]
type Payment = Literal["Spot", "onDemand"]
type Behavior = Literal["terminate", "stop", "hibernate"]
type Region = str | tuple[str, ...]

ALL_REGIONS = "all"

DEFAULT_BEHAVIOR: Behavior = "terminate"
DEFAULT_FREQUENCY = 4

# Interruption-probability bands, indexed by Component.frequency
FREQUENCY_BANDS: tuple[tuple[str, str], ...] = (
    ("<5%", "Very Low"),
    ("5-10%", "Low"),
    ("10-15%", "Moderate"),
    ("15-20%", "High"),
    (">20%", "Very High"),
)

BEHAVIORS: tuple[Behavior, ...] = ("terminate", "stop", "hibernate")


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# =============================================================================
# Workload
# =============================================================================


@dataclass(frozen=True, slots=True)
class Component:
    """One resource-demanding unit of an App.

    Attributes:
        name: Component name, unique within its App by convention.
        vcpus: Required vCPUs. 0 means not filled in yet.
        memory: Required memory in GB. 0 means not filled in yet.
        network: Required network bandwidth in Gbps.
        behavior: What the instance does on a spot interruption.
        frequency: Tolerated interruption band, 0 (<5%) to 4 (>20%).
        storage_type: Storage hint, forwarded as-is.
        affinity: Placement hint, forwarded as-is.
        anti_affinity: Placement hint, forwarded as-is.
        burstable: Whether burstable instance families are acceptable.
    """

    name: str = ""
    vcpus: int = 0
    memory: int = 0
    network: int = 0
    behavior: Behavior = DEFAULT_BEHAVIOR
    frequency: int = DEFAULT_FREQUENCY
    storage_type: str | None = None
    affinity: str | None = None
    anti_affinity: str | None = None
    burstable: bool | None = None

    def __post_init__(self) -> None:
        if self.behavior not in BEHAVIORS:
            raise ValueError(
                f"Invalid behavior: {self.behavior!r}. Use {', '.join(BEHAVIORS)}"
            )
        if not 0 <= self.frequency < len(FREQUENCY_BANDS):
            raise ValueError(
                f"frequency must be between 0 and {len(FREQUENCY_BANDS) - 1}, got {self.frequency}"
            )

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "vCPUs": self.vcpus,
            "memory": self.memory,
            "network": self.network,
        }
        # Absent behavior/frequency mean the defaults to the service
        if self.behavior != DEFAULT_BEHAVIOR:
            data["behavior"] = self.behavior
        if self.frequency != DEFAULT_FREQUENCY:
            data["frequency"] = self.frequency
        data.update(_drop_none({
            "storageType": self.storage_type,
            "affinity": self.affinity,
            "anti-affinity": self.anti_affinity,
            "burstable": self.burstable,
        }))
        return data

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Component:
        return cls(
            name=str(data.get("name", "")),
            vcpus=int(data.get("vCPUs", 0)),
            memory=int(data.get("memory", 0)),
            network=int(data.get("network", 0)),
            behavior=data.get("behavior", DEFAULT_BEHAVIOR),
            frequency=int(data.get("frequency", DEFAULT_FREQUENCY)),
            storage_type=data.get("storageType"),
            affinity=data.get("affinity"),
            anti_affinity=data.get("anti-affinity"),
            burstable=data.get("burstable"),
        )


@dataclass(frozen=True, slots=True)
class App:
    """A named group of Components deployed together.

    ``share`` tells the optimizer whether these Components may be packed onto
    instances that also host other Apps' Components.
    """

    app: str
    share: bool = True
    components: tuple[Component, ...] = (Component(),)

    def to_wire(self) -> dict[str, Any]:
        return {
            "app": self.app,
            "share": self.share,
            "components": [c.to_wire() for c in self.components],
        }

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> App:
        return cls(
            app=str(data.get("app", "")),
            share=bool(data.get("share", True)),
            components=tuple(Component.from_wire(c) for c in data.get("components", ())),
        )


# =============================================================================
# Requests
# =============================================================================


def _region_to_wire(region: Region) -> str | list[str]:
    match region:
        case str():
            return region
        case _:
            return list(region)


@dataclass(frozen=True, slots=True)
class FleetRequest:
    """Body of a fleet optimization call."""

    selected_os: OperatingSystem
    payment: Payment
    region: Region
    apps: tuple[App, ...]
    filter_instances: tuple[str, ...] | None = None
    architecture: str | None = None
    type_major: tuple[str, ...] | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "selectedOs": self.selected_os,
            "payment": self.payment,
            "region": _region_to_wire(self.region),
            "apps": [a.to_wire() for a in self.apps],
        }
        data.update(_drop_none({
            "filterInstances": list(self.filter_instances) if self.filter_instances else None,
            "architecture": self.architecture,
            "type_major": list(self.type_major) if self.type_major else None,
        }))
        return data


@dataclass(frozen=True, slots=True)
class SingleInstanceRequest:
    """Body of a single-instance price search. No App/Component nesting."""

    selected_os: OperatingSystem
    payment: Payment
    selected_region: str
    vcpus: int
    memory: int
    size: int | None = None
    iops: int | None = None
    throughput: int | None = None
    network: int | None = None
    behavior: Behavior | None = None
    frequency: int | None = None
    storage_type: str | None = None
    burstable: bool | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "selectedOs": self.selected_os,
            "payment": self.payment,
            "selectedRegion": self.selected_region,
            "vCPUs": self.vcpus,
            "memory": self.memory,
        }
        data.update(_drop_none({
            "size": self.size,
            "iops": self.iops,
            "throughput": self.throughput,
            "network": self.network,
            "behavior": self.behavior,
            "frequency": self.frequency,
            "storageType": self.storage_type,
            "burstable": self.burstable,
        }))
        return data


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class ComponentAssignment:
    """Which workload piece occupies an instance."""

    app_name: str
    component_name: str

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> ComponentAssignment:
        return cls(app_name=str(data["appName"]), component_name=str(data["componentName"]))


@dataclass(frozen=True, slots=True)
class Instance:
    """A priced instance inside a fleet configuration."""

    type_name: str
    region: str
    cpu: str
    memory: str
    network: str
    os: str
    type_major: str
    type_minor: str
    on_demand_price: float
    spot_price: float
    discount: float
    interruption_frequency: str | None = None
    price_after_discount: float | None = None
    components: tuple[ComponentAssignment, ...] | None = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Instance:
        components = data.get("components")
        return cls(
            **_instance_fields(data),
            components=(
                tuple(ComponentAssignment.from_wire(c) for c in components)
                if components is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class FleetResult:
    """One candidate fleet: a set of instances with an aggregate hourly price."""

    price: float
    region: str
    instances: tuple[Instance, ...]

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> FleetResult:
        return cls(
            price=float(data["price"]),
            region=str(data["region"]),
            instances=tuple(Instance.from_wire(i) for i in data["instances"]),
        )


@dataclass(frozen=True, slots=True)
class SingleInstanceResult:
    """One matching instance type from a single-instance search."""

    type_name: str
    region: str
    cpu: str
    memory: str
    network: str
    os: str
    type_major: str
    type_minor: str
    on_demand_price: float
    spot_price: float
    discount: float
    total_price: float
    interruption_frequency: str | None = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> SingleInstanceResult:
        fields = _instance_fields(data)
        fields.pop("price_after_discount")
        return cls(**fields, total_price=float(data["total_price"]))


def _instance_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Fields shared by fleet instances and single-instance results."""
    after = data.get("priceAfterDiscount")
    return {
        "type_name": str(data["typeName"]),
        "region": str(data.get("region", "")),
        "cpu": str(data.get("cpu", "")),
        "memory": str(data.get("memory", "")),
        "network": str(data.get("network", "")),
        "os": str(data.get("os", "")),
        "type_major": str(data.get("typeMajor", "")),
        "type_minor": str(data.get("typeMinor", "")),
        "on_demand_price": float(data.get("onDemandPrice", 0)),
        "spot_price": float(data["spot_price"]),
        "discount": float(data.get("discount", 0)),
        "interruption_frequency": data.get("interruption_frequency"),
        "price_after_discount": float(after) if after is not None else None,
    }


def as_region(value: str | Sequence[str]) -> Region:
    """Normalize a region selection: strings pass through, sequences become tuples."""
    match value:
        case str():
            return value
        case _:
            return tuple(value)
