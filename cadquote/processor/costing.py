"""Cost synthesis for a single analyzed file.

Every monetary and percentage figure is computed from unrounded inputs and
rounded once, half-up, at the end. The market price is derived from the
already rounded total so that ``market_price == 2 * total`` holds exactly
with the default multiplier.
"""

import math
from dataclasses import dataclass

from cadquote.config.settings import Settings
from cadquote.processor.models import (
    CostBreakdown,
    CostEstimation,
    GeometryFeatures,
    ManufacturingData,
    MaterialRecommendation,
    Pricing,
    Savings,
    Timeline,
)

PROGRAMMING_HOURS = 2
FINISHING_HOURS = 1
QUALITY_HOURS = 1


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class CostRates:
    """Fixed pricing constants; savings apply to machining cost only."""

    optimization_savings: float = 0.3
    process_savings: float = 0.2
    market_multiplier: float = 2.0
    surface_treatment_per_area: float = 0.05
    quality_control_rate: float = 0.1
    shipping_per_gram: float = 0.01
    min_shipping: float = 50.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "CostRates":
        return cls(
            optimization_savings=settings.optimization_savings_rate,
            process_savings=settings.process_savings_rate,
            market_multiplier=settings.market_price_multiplier,
        )


def estimate_cost(
    features: GeometryFeatures,
    manufacturing: ManufacturingData,
    material: MaterialRecommendation,
    rates: CostRates | None = None,
) -> CostEstimation:
    """Price a part from its geometry, process plan and top-ranked material."""
    rates = rates or CostRates()

    material_cost = features.estimated_weight / 1000 * material.cost
    machining_cost = manufacturing.total_cost
    surface_cost = features.surface_area * rates.surface_treatment_per_area
    qc_cost = (material_cost + machining_cost) * rates.quality_control_rate
    shipping_cost = max(features.estimated_weight * rates.shipping_per_gram, rates.min_shipping)

    subtotal = material_cost + machining_cost + surface_cost + qc_cost + shipping_cost
    optimization_savings = machining_cost * rates.optimization_savings
    process_savings = machining_cost * rates.process_savings

    total = round_half_up(subtotal - optimization_savings - process_savings)
    market_price = round_half_up(total * rates.market_multiplier)
    savings_amount = market_price - total
    savings_percentage = (
        round_half_up(savings_amount / market_price * 100) if market_price else 0
    )

    return CostEstimation(
        breakdown=CostBreakdown(
            material=round_half_up(material_cost),
            machining=round_half_up(machining_cost),
            surface_treatment=round_half_up(surface_cost),
            quality_control=round_half_up(qc_cost),
            shipping=round_half_up(shipping_cost),
        ),
        savings=Savings(
            optimization=round_half_up(optimization_savings),
            process=round_half_up(process_savings),
        ),
        pricing=Pricing(
            subtotal=round_half_up(subtotal),
            total=total,
            market_price=market_price,
            savings_amount=savings_amount,
            savings_percentage=savings_percentage,
        ),
        timeline=Timeline(
            programming=PROGRAMMING_HOURS,
            machining=round_half_up(manufacturing.total_time),
            finishing=FINISHING_HOURS,
            quality=QUALITY_HOURS,
            total=round_half_up(
                manufacturing.total_time + PROGRAMMING_HOURS + FINISHING_HOURS + QUALITY_HOURS
            ),
        ),
    )
