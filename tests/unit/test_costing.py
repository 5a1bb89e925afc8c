import pytest

from cadquote.config.settings import Settings
from cadquote.processor.costing import CostRates, estimate_cost, round_half_up
from cadquote.processor.models import (
    BoundingBox,
    FeatureCounts,
    GeometryFeatures,
    ManufacturingData,
    ManufacturingProcess,
    MaterialRecommendation,
)

ALUMINUM = MaterialRecommendation(
    name="6061-T6 Aluminum Alloy",
    density=2.7,
    cost=18,
    pros=[],
    cons=[],
    suitability=0.9,
)


def _features(volume: float, complexity: float) -> GeometryFeatures:
    return GeometryFeatures(
        volume=volume,
        bounding_box=BoundingBox(length=100, width=50, height=30),
        complexity=complexity,
        features=FeatureCounts(holes=0, curves=0, threads=0, undercuts=0),
        surface_area=volume * (4 + complexity * 2),
        estimated_weight=volume * 2.7,
    )


def _manufacturing(time: float, cost: float) -> ManufacturingData:
    process = ManufacturingProcess(name="2.5-axis CNC machining", reason="", time=time, cost=cost)
    return ManufacturingData(processes=[process], total_time=time, total_cost=cost, difficulty="low")


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"), [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-0.5, 0)]
    )
    def test_rounds_halves_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestEstimateCost:
    def test_known_breakdown(self) -> None:
        estimation = estimate_cost(_features(100, 0.3), _manufacturing(2.3, 36), ALUMINUM)

        b = estimation.breakdown
        assert (b.material, b.machining, b.surface_treatment, b.quality_control, b.shipping) == (
            5,
            36,
            23,
            4,
            50,
        )
        assert (estimation.savings.optimization, estimation.savings.process) == (11, 7)
        p = estimation.pricing
        assert p.subtotal == 118
        assert p.total == 100
        assert p.market_price == 200
        assert p.savings_amount == 100
        assert p.savings_percentage == 50

    def test_timeline(self) -> None:
        timeline = estimate_cost(_features(100, 0.3), _manufacturing(2.3, 36), ALUMINUM).timeline
        assert (timeline.programming, timeline.finishing, timeline.quality) == (2, 1, 1)
        assert timeline.machining == 2
        assert timeline.total == 6

    def test_heavy_parts_pay_weight_based_shipping(self) -> None:
        estimation = estimate_cost(_features(4000, 0.5), _manufacturing(10, 100), ALUMINUM)
        assert estimation.breakdown.shipping == 108

    @pytest.mark.parametrize(
        ("volume", "complexity", "time", "cost"),
        [(100, 0.2, 2.2, 34), (537.3, 0.55, 17.1, 285.2), (1099.9, 0.99, 57.0, 929.5)],
    )
    def test_pricing_invariants(
        self, volume: float, complexity: float, time: float, cost: float
    ) -> None:
        estimation = estimate_cost(_features(volume, complexity), _manufacturing(time, cost), ALUMINUM)
        b = estimation.breakdown
        components = b.material + b.machining + b.surface_treatment + b.quality_control + b.shipping
        assert components >= estimation.pricing.total
        assert estimation.pricing.market_price == 2 * estimation.pricing.total
        assert estimation.pricing.savings_amount == estimation.pricing.total
        assert all(
            v >= 0
            for v in (b.material, b.machining, b.surface_treatment, b.quality_control, b.shipping)
        )

    def test_rates_are_configurable(self) -> None:
        rates = CostRates(optimization_savings=0.0, process_savings=0.0, market_multiplier=3.0)
        estimation = estimate_cost(_features(100, 0.3), _manufacturing(2.3, 36), ALUMINUM, rates)
        assert estimation.pricing.total == 118
        assert estimation.pricing.market_price == 354
        assert estimation.savings.optimization == 0


class TestCostRatesFromSettings:
    def test_reads_rates(self) -> None:
        settings = Settings(
            _env_file=None,
            optimization_savings_rate=0.25,
            process_savings_rate=0.1,
            market_price_multiplier=1.5,
        )
        rates = CostRates.from_settings(settings)
        assert rates.optimization_savings == 0.25
        assert rates.process_savings == 0.1
        assert rates.market_multiplier == 1.5
