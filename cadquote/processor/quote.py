import time
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from cadquote.logging.logger import Log
from cadquote.processor.costing import round_half_up
from cadquote.processor.models import (
    AnalysisReport,
    AnalysisSummary,
    CompetitorQuote,
    FileAnalysis,
    NextStep,
    ProgressEvent,
    QualityPromise,
    Quote,
    Recommendation,
    Stage,
)
from cadquote.processor.pipeline import Sleep, default_sleep
from cadquote.processor.progress import ProgressReporter

HIGH_COMPLEXITY = 0.7
LARGE_VOLUME = 500
BATCH_PRODUCTION_FILES = 3

# (name, logo, price multiplier over our total, delivery, advantages, disadvantages)
COMPETITORS: list[tuple[str, str, float, str, list[str], list[str]]] = [
    (
        "Xometry",
        "/icons/competitors/xometry.png",
        2.2,
        "7-14 days",
        ["Well known"],
        ["Expensive", "Long lead times", "Slow support"],
    ),
    (
        "Protolabs",
        "/icons/competitors/protolabs.png",
        1.8,
        "3-5 days",
        ["Fast prototyping"],
        ["Higher prices", "Costly volume production"],
    ),
    (
        "Fictiv",
        "/icons/competitors/fictiv.png",
        1.6,
        "5-8 days",
        ["Platform based"],
        ["Inconsistent quality", "Slow communication"],
    ),
]

QUALITY_PROMISES = [
    QualityPromise(
        title="Precision guarantee",
        detail="±0.05mm machining accuracy, 100% remake if out of tolerance",
        icon="precision",
    ),
    QualityPromise(
        title="Delivery commitment",
        detail="24-hour express delivery, 10% compensation for delays",
        icon="delivery",
    ),
    QualityPromise(
        title="Quality tracking",
        detail="End-to-end inspection monitoring with live quality reports",
        icon="quality",
    ),
    QualityPromise(
        title="After-sales service",
        detail="24/7 technical support with a dedicated account manager",
        icon="service",
    ),
]

NEXT_STEPS = [
    NextStep(1, "Confirm quote", "Click confirm to accept this quote", "confirm-quote"),
    NextStep(
        2,
        "Provide detailed requirements",
        "Fill in machining and surface finishing requirements",
        "fill-requirements",
    ),
    NextStep(3, "Pay deposit", "Pay a 30% deposit to start production", "payment"),
    NextStep(
        4,
        "Track production",
        "Follow production progress and quality reports in real time",
        "track-production",
    ),
]


def _new_quote_id() -> str:
    return f"QT-{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:6]}"


class QuoteAssembler:
    """Turns finished per-file analyses into the customer-facing quote."""

    def __init__(
        self,
        reporter: ProgressReporter,
        sleep: Sleep | None = None,
        delay_ms: int = 1000,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._reporter = reporter
        self._sleep = sleep if sleep is not None else default_sleep()
        self._delay_ms = delay_ms
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def assemble(self, records: Sequence[FileAnalysis]) -> Quote:
        await self._sleep(self._delay_ms / 1000)
        self._reporter.progress(
            ProgressEvent(stage=Stage.QUOTE, progress=100, message="Generating quote...")
        )

        summary = summarize(records)
        quote = Quote(
            id=_new_quote_id(),
            timestamp=self._clock().isoformat(),
            analysis=AnalysisReport(files=tuple(records), summary=summary),
            recommendations=recommend(records, summary),
            competitor_comparison=compare_competitors(summary.total_cost),
            quality_promises=list(QUALITY_PROMISES),
            next_steps=list(NEXT_STEPS),
        )
        Log.info(
            f"Quote {quote.id} assembled for {summary.total_files} files: "
            f"total={summary.total_cost} market={summary.total_market_price}"
        )
        return quote


def summarize(records: Sequence[FileAnalysis]) -> AnalysisSummary:
    if not records:
        raise ValueError("Cannot summarize an empty analysis batch")
    total_cost = sum(r.cost_estimation.pricing.total for r in records)
    total_market_price = sum(r.cost_estimation.pricing.market_price for r in records)
    avg_complexity = sum(r.features.complexity for r in records) / len(records)
    return AnalysisSummary(
        total_files=len(records),
        total_volume=round_half_up(sum(r.features.volume for r in records)),
        total_cost=total_cost,
        total_market_price=total_market_price,
        total_savings=total_market_price - total_cost,
        avg_complexity=round_half_up(avg_complexity * 100) / 100,
        estimated_delivery=max(r.cost_estimation.timeline.total for r in records),
    )


def recommend(
    records: Sequence[FileAnalysis], summary: AnalysisSummary
) -> list[Recommendation]:
    """Apply each advisory rule independently."""
    recommendations: list[Recommendation] = []

    if summary.avg_complexity > HIGH_COMPLEXITY:
        recommendations.append(
            Recommendation(
                type="manufacturing",
                title="Complex geometry optimization",
                description="Simplify selected features to reduce machining difficulty and cost",
                impact="Saves 15-25% of manufacturing cost",
            )
        )

    if any(r.features.volume > LARGE_VOLUME for r in records):
        recommendations.append(
            Recommendation(
                type="material",
                title="Lightweight material selection",
                description="Use 6061-T6 aluminum alloy instead of steel",
                impact="65% lighter parts and lower shipping cost",
            )
        )

    if len(records) > BATCH_PRODUCTION_FILES:
        recommendations.append(
            Recommendation(
                type="batch",
                title="Batch production optimization",
                description="Multiple parts can share fixturing to lower unit cost",
                impact="5-15% batch discount",
            )
        )

    return recommendations


def compare_competitors(our_price: int) -> list[CompetitorQuote]:
    return [
        CompetitorQuote(
            name=name,
            logo=logo,
            price=round_half_up(our_price * multiplier),
            delivery=delivery,
            advantages=list(advantages),
            disadvantages=list(disadvantages),
        )
        for name, logo, multiplier, delivery, advantages, disadvantages in COMPETITORS
    ]
