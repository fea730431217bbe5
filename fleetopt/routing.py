"""Map a provider and an operation onto the optimization service endpoint."""

from __future__ import annotations

from fleetopt.types import Operation, Provider

ENDPOINTS: dict[Provider, dict[Operation, str]] = {
    "AWS": {"fleet": "/getAWSFleet", "single": "/getAWSPrices"},
    "Azure": {"fleet": "/getAzureFleet", "single": "/getAzurePrices"},
    "Hybrid": {"fleet": "/getHybridCloudFleet", "single": "/getHybridPrices"},
}

PROVIDERS: dict[Provider, str] = {
    "AWS": "AWS",
    "Azure": "Azure",
    "Hybrid": "Hybrid (AWS + Azure)",
}


def endpoint_for(provider: Provider, operation: Operation) -> str:
    """Endpoint path for ``operation`` against ``provider``.

    The provider set is closed; anything else is a caller bug.
    """
    routes = ENDPOINTS.get(provider)
    if routes is None:
        raise ValueError(f"Unknown provider '{provider}'. Valid: {', '.join(ENDPOINTS)}")
    endpoint = routes.get(operation)
    if endpoint is None:
        raise ValueError(f"Unknown operation '{operation}'. Valid: fleet, single")
    return endpoint
