"""fleetopt - Find the cheapest cloud configuration for your workload.

Example:

    from fleetopt import Component, FleetSession, OptimizerClient

    async with OptimizerClient("http://localhost:5000") as client:
        session = FleetSession(client=client, provider="AWS", payment="Spot")
        session.form = session.form.update_component(
            0, 0, Component(name="web", vcpus=2, memory=4)
        )
        for config in await session.submit():
            print(config.rank, config.price, config.region)
"""

# Client and sessions
from fleetopt.client import DEFAULT_API_URL, OptimizerClient

# Configuration
from fleetopt.config import Settings, Workload, load_settings, load_workload

# Errors
from fleetopt.errors import (
    FleetOptError,
    MalformedResponseError,
    SubmissionInProgressError,
    TransportError,
    ValidationError,
)

# Form state
from fleetopt.form import WorkloadForm
from fleetopt.logging import LogConfig, setup_logging, teardown_logging

# Requests
from fleetopt.request import build_fleet_request, build_single_request, is_complete, to_payload

# Results
from fleetopt.results import (
    NO_RESULTS_MESSAGE,
    DisplayConfiguration,
    DisplayInstance,
    FleetResults,
    Results,
    SingleResults,
    decode_results,
    interpret_fleet_results,
    interpret_single_results,
)
from fleetopt.routing import endpoint_for
from fleetopt.session import FleetSession, SearchSession

# Types
from fleetopt.types import (
    App,
    Component,
    ComponentAssignment,
    FleetRequest,
    FleetResult,
    Instance,
    Provider,
    SingleInstanceRequest,
    SingleInstanceResult,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "OptimizerClient",
    "DEFAULT_API_URL",
    "FleetSession",
    "SearchSession",
    # Configuration
    "Settings",
    "Workload",
    "load_settings",
    "load_workload",
    "LogConfig",
    "setup_logging",
    "teardown_logging",
    # Errors
    "FleetOptError",
    "ValidationError",
    "TransportError",
    "MalformedResponseError",
    "SubmissionInProgressError",
    # Form and requests
    "WorkloadForm",
    "build_fleet_request",
    "build_single_request",
    "is_complete",
    "to_payload",
    "endpoint_for",
    # Results
    "NO_RESULTS_MESSAGE",
    "DisplayConfiguration",
    "DisplayInstance",
    "FleetResults",
    "SingleResults",
    "Results",
    "decode_results",
    "interpret_fleet_results",
    "interpret_single_results",
    # === Types ===
    "App",
    "Component",
    "ComponentAssignment",
    "FleetRequest",
    "FleetResult",
    "Instance",
    "Provider",
    "SingleInstanceRequest",
    "SingleInstanceResult",
    # Version
    "__version__",
]
