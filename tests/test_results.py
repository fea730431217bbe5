import pytest

from fleetopt.errors import MalformedResponseError, TransportError
from fleetopt.results import (
    MAX_FLEET_CONFIGURATIONS,
    MAX_SINGLE_INSTANCES,
    FleetResults,
    SingleResults,
    decode_results,
    discount_badge,
    format_price,
    interpret_fleet_results,
    interpret_single_results,
)
from tests.conftest import fleet_json, instance_json, single_json

pytestmark = [pytest.mark.unit]


class TestDiscountBadge:
    @pytest.mark.parametrize("discount", [0, 0.0, -5])
    def test_no_badge_without_discount(self, discount):
        assert discount_badge(discount) is None

    def test_badge_for_positive_discount(self):
        assert discount_badge(54) == "54% discount"
        assert discount_badge(12.5) == "12.5% discount"
        assert discount_badge(0.1) == "0.1% discount"


class TestFleetInterpretation:
    def test_keeps_price_region_and_order(self):
        raw = [fleet_json(price=0.3, region="eu-west-1"), fleet_json(price=0.1, region="us-east-1")]
        configs = interpret_fleet_results(raw)
        assert [c.price for c in configs] == [0.3, 0.1]
        assert [c.region for c in configs] == ["eu-west-1", "us-east-1"]
        assert [c.rank for c in configs] == [1, 2]

    def test_truncates_to_ten(self):
        raw = [fleet_json(price=float(i)) for i in range(15)]
        configs = interpret_fleet_results(raw)
        assert len(configs) == MAX_FLEET_CONFIGURATIONS == 10
        assert configs[-1].price == 9.0

    def test_components_summary(self):
        raw = [{
            "price": 0.1,
            "region": "us-east-1",
            "instances": [
                instance_json(components=[
                    {"appName": "App1", "componentName": "web"},
                    {"appName": "App2", "componentName": "worker"},
                ]),
                instance_json(),
            ],
        }]
        first, second = interpret_fleet_results(raw)[0].instances
        assert first.components_summary == "web, worker"
        assert second.components_summary is None

    def test_instance_discount_badges(self):
        raw = [{
            "price": 0.1,
            "region": "us-east-1",
            "instances": [instance_json(discount=0), instance_json(discount=70)],
        }]
        first, second = interpret_fleet_results(raw)[0].instances
        assert first.discount_badge is None
        assert second.discount_badge == "70% discount"

    def test_instance_price_is_spot_price(self):
        raw = [{"price": 0.1, "region": "r", "instances": [instance_json(spot_price=0.0123)]}]
        inst = interpret_fleet_results(raw)[0].instances[0]
        assert inst.price == inst.spot_price == 0.0123

    def test_empty_is_valid(self):
        assert interpret_fleet_results([]) == ()


class TestSingleInterpretation:
    def test_truncates_to_twenty_in_order(self):
        raw = [single_json(f"t{i}", total_price=1.0 / (i + 1)) for i in range(25)]
        rows = interpret_single_results(raw)
        assert len(rows) == MAX_SINGLE_INSTANCES == 20
        assert [r.type_name for r in rows] == [f"t{i}" for i in range(20)]

    def test_total_price_is_display_price(self):
        row = interpret_single_results([single_json(total_price=0.5)])[0]
        assert row.price == 0.5
        assert row.components_summary is None

    def test_empty_is_valid(self):
        assert interpret_single_results([]) == ()


class TestDecoding:
    def test_decode_by_kind(self):
        fleet = decode_results("fleet", [fleet_json()])
        single = decode_results("single", [single_json()])
        assert isinstance(fleet, FleetResults)
        assert isinstance(single, SingleResults)
        assert not fleet.empty
        assert single.instances[0].total_price == 0.07

    def test_empty_variants(self):
        assert decode_results("fleet", []).empty
        assert decode_results("single", []).empty

    def test_component_assignment_fields(self):
        result = decode_results("fleet", [fleet_json(instances=1)])
        assert isinstance(result, FleetResults)
        assignment = result.configurations[0].instances[0].components[0]  # type: ignore[index]
        assert (assignment.app_name, assignment.component_name) == ("App1", "c0")

    def test_not_a_list(self):
        with pytest.raises(MalformedResponseError, match="list"):
            decode_results("fleet", {"message": "nope"})

    def test_missing_field(self):
        with pytest.raises(MalformedResponseError):
            decode_results("single", [instance_json()])  # no total_price

    def test_malformed_is_transport_error(self):
        with pytest.raises(TransportError):
            decode_results("fleet", [{"region": "x"}])

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            decode_results("bulk", [])  # type: ignore[arg-type]


def test_format_price():
    assert format_price(0.0416) == "$0.0416"
    assert format_price(1.5) == "$1.5000"
