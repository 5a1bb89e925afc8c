import random

from cadquote.logging.logger import Log
from cadquote.processor.costing import CostRates, estimate_cost
from cadquote.processor.exceptions import StepOrderError
from cadquote.processor.models import (
    BoundingBox,
    FeatureCounts,
    GeometryFeatures,
    ManufacturingData,
    ManufacturingProcess,
    MaterialRecommendation,
)
from cadquote.processor.pipeline import AnalysisContext, AnalysisStep

ALUMINUM_DENSITY = 2.7


class GeometryStep(AnalysisStep):
    """Synthesizes geometry features; nothing is read from the file content."""

    name = "Geometry feature recognition"
    weight = 0.3

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def run(self, context: AnalysisContext) -> AnalysisContext:
        rng = self._rng
        volume = rng.random() * 1000 + 100
        complexity = rng.random() * 0.8 + 0.2
        context.features = GeometryFeatures(
            volume=volume,
            bounding_box=BoundingBox(
                length=rng.random() * 200 + 50,
                width=rng.random() * 150 + 30,
                height=rng.random() * 100 + 20,
            ),
            complexity=complexity,
            features=FeatureCounts(
                holes=rng.randrange(20),
                curves=rng.randrange(15),
                threads=rng.randrange(8),
                undercuts=rng.randrange(5),
            ),
            surface_area=volume * (4 + complexity * 2),
            estimated_weight=volume * ALUMINUM_DENSITY,
        )
        Log.debug(
            f"Geometry for {context.file.name}: volume={volume:.1f} "
            f"complexity={complexity:.2f}"
        )
        return context


class ManufacturingStep(AnalysisStep):
    name = "Manufacturing process analysis"
    weight = 0.3

    def run(self, context: AnalysisContext) -> AnalysisContext:
        features = context.features
        if features is None:
            raise StepOrderError("Geometry features must be set before process analysis")

        volume = features.volume
        complexity = features.complexity
        processes = [self._primary_process(volume, complexity)]

        holes = features.features.holes
        if holes > 10:
            processes.append(
                ManufacturingProcess(
                    name="Precision drilling",
                    reason="Many holes call for a dedicated drilling pass",
                    time=holes * 0.1,
                    cost=holes * 2,
                )
            )
        threads = features.features.threads
        if threads > 0:
            processes.append(
                ManufacturingProcess(
                    name="Thread machining",
                    reason="Threaded features need dedicated tapping",
                    time=threads * 0.15,
                    cost=threads * 3,
                )
            )

        context.manufacturing_data = ManufacturingData(
            processes=processes,
            total_time=sum(p.time for p in processes),
            total_cost=sum(p.cost for p in processes),
            difficulty=_difficulty(complexity),
        )
        return context

    @staticmethod
    def _primary_process(volume: float, complexity: float) -> ManufacturingProcess:
        if complexity > 0.7:
            return ManufacturingProcess(
                name="5-axis CNC machining",
                reason="Complex geometry requires multi-axis machining",
                time=volume * 0.05 + complexity * 2,
                cost=volume * 0.8 + complexity * 50,
            )
        if complexity > 0.4:
            return ManufacturingProcess(
                name="3-axis CNC machining",
                reason="Moderate complexity suits 3-axis machining",
                time=volume * 0.03 + complexity * 1.5,
                cost=volume * 0.5 + complexity * 30,
            )
        return ManufacturingProcess(
            name="2.5-axis CNC machining",
            reason="Simple geometry suits 2.5-axis machining",
            time=volume * 0.02 + complexity * 1,
            cost=volume * 0.3 + complexity * 20,
        )


def _difficulty(complexity: float) -> str:
    if complexity > 0.6:
        return "high"
    if complexity > 0.3:
        return "medium"
    return "low"


class MaterialStep(AnalysisStep):
    name = "Material recommendation"
    weight = 0.2

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.features is None:
            raise StepOrderError("Geometry features must be set before material ranking")
        complexity = context.features.complexity
        candidates = [
            MaterialRecommendation(
                name="6061-T6 Aluminum Alloy",
                density=2.7,
                cost=18,
                pros=["Lightweight", "Easy to machine", "Corrosion resistant"],
                cons=["Moderate strength"],
                suitability=0.9,
            ),
            MaterialRecommendation(
                name="304 Stainless Steel",
                density=7.9,
                cost=25,
                pros=["High strength", "Corrosion resistant", "Food grade"],
                cons=["Heavy", "Harder to machine"],
                suitability=0.8 if complexity < 0.5 else 0.6,
            ),
            MaterialRecommendation(
                name="Q235 Carbon Steel",
                density=7.8,
                cost=12,
                pros=["Low cost", "Easy to weld", "High strength"],
                cons=["Rusts easily", "Needs surface treatment"],
                suitability=0.7 if complexity < 0.4 else 0.5,
            ),
        ]
        context.materials = rank_materials(candidates)
        return context


def rank_materials(materials: list[MaterialRecommendation]) -> list[MaterialRecommendation]:
    """Sort by suitability, best first; equal scores keep their input order."""
    return sorted(materials, key=lambda m: m.suitability, reverse=True)


class CostStep(AnalysisStep):
    name = "Cost estimation"
    weight = 0.2

    def __init__(self, rates: CostRates | None = None) -> None:
        self._rates = rates or CostRates()

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.features is None or context.manufacturing_data is None:
            raise StepOrderError(
                "Geometry and process analysis must run before cost estimation"
            )
        if not context.materials:
            raise StepOrderError("Material ranking must run before cost estimation")
        context.cost_estimation = estimate_cost(
            context.features,
            context.manufacturing_data,
            context.materials[0],
            self._rates,
        )
        Log.debug(
            f"Cost for {context.file.name}: total={context.cost_estimation.pricing.total}"
        )
        return context


def default_steps(rng: random.Random, rates: CostRates | None = None) -> list[AnalysisStep]:
    """The fixed analysis order; each step consumes the output of the ones before it."""
    return [GeometryStep(rng), ManufacturingStep(), MaterialStep(), CostStep(rates)]
