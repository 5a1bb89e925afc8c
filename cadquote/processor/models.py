from dataclasses import dataclass, field
from enum import Enum

from cadquote.validation.models import CandidateFile


class Stage(str, Enum):
    UPLOAD = "upload"
    ANALYSIS = "analysis"
    QUOTE = "quote"


@dataclass(frozen=True)
class ProgressEvent:
    """A single progress notification; emitted, never stored."""

    stage: Stage
    progress: float
    message: str
    current_file: str | None = None
    current_step: str | None = None
    overall_progress: float | None = None


@dataclass(frozen=True)
class AnalysisStepDescriptor:
    name: str
    weight: float


@dataclass(frozen=True)
class BoundingBox:
    length: float
    width: float
    height: float


@dataclass(frozen=True)
class FeatureCounts:
    holes: int
    curves: int
    threads: int
    undercuts: int


@dataclass(frozen=True)
class GeometryFeatures:
    """Synthetic geometry: volume in cm3, dimensions in mm, weight in g."""

    volume: float
    bounding_box: BoundingBox
    complexity: float
    features: FeatureCounts
    surface_area: float
    estimated_weight: float


@dataclass(frozen=True)
class ManufacturingProcess:
    name: str
    reason: str
    time: float
    cost: float


@dataclass(frozen=True)
class ManufacturingData:
    processes: list[ManufacturingProcess]
    total_time: float
    total_cost: float
    difficulty: str


@dataclass(frozen=True)
class MaterialRecommendation:
    name: str
    density: float
    cost: float
    pros: list[str]
    cons: list[str]
    suitability: float


@dataclass(frozen=True)
class CostBreakdown:
    material: int
    machining: int
    surface_treatment: int
    quality_control: int
    shipping: int


@dataclass(frozen=True)
class Savings:
    optimization: int
    process: int


@dataclass(frozen=True)
class Pricing:
    subtotal: int
    total: int
    market_price: int
    savings_amount: int
    savings_percentage: int


@dataclass(frozen=True)
class Timeline:
    """Production timeline in hours."""

    programming: int
    machining: int
    finishing: int
    quality: int
    total: int


@dataclass(frozen=True)
class CostEstimation:
    breakdown: CostBreakdown
    savings: Savings
    pricing: Pricing
    timeline: Timeline


@dataclass(frozen=True)
class FileAnalysis:
    """Finalized analysis record for one file."""

    name: str
    size: int
    extension: str
    features: GeometryFeatures
    manufacturing_data: ManufacturingData
    materials: list[MaterialRecommendation]
    cost_estimation: CostEstimation


@dataclass(frozen=True)
class AnalysisSummary:
    total_files: int
    total_volume: int
    total_cost: int
    total_market_price: int
    total_savings: int
    avg_complexity: float
    estimated_delivery: int


@dataclass(frozen=True)
class AnalysisReport:
    files: tuple[FileAnalysis, ...]
    summary: AnalysisSummary


@dataclass(frozen=True)
class Recommendation:
    type: str
    title: str
    description: str
    impact: str


@dataclass(frozen=True)
class CompetitorQuote:
    name: str
    logo: str
    price: int
    delivery: str
    advantages: list[str]
    disadvantages: list[str]


@dataclass(frozen=True)
class QualityPromise:
    title: str
    detail: str
    icon: str


@dataclass(frozen=True)
class NextStep:
    step: int
    title: str
    description: str
    action: str


@dataclass(frozen=True)
class Quote:
    """Final output of one successful pipeline run."""

    id: str
    timestamp: str
    analysis: AnalysisReport
    recommendations: list[Recommendation] = field(default_factory=list)
    competitor_comparison: list[CompetitorQuote] = field(default_factory=list)
    quality_promises: list[QualityPromise] = field(default_factory=list)
    next_steps: list[NextStep] = field(default_factory=list)


@dataclass(frozen=True)
class ProcessingResult:
    """Payload handed to ``on_complete``."""

    files: list[CandidateFile]
    quote: Quote
