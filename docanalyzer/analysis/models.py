from dataclasses import dataclass, field


@dataclass(frozen=True)
class CostAndRiskAnalysis:
    """Costs and risks found in the document."""

    costs: list[str] = field(default_factory=list)
    risks: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Analysis:
    """Validated result of analyzing one document."""

    summary: str
    critical_findings: list[str] = field(default_factory=list)
    cost_and_risk_analysis: CostAndRiskAnalysis = field(default_factory=CostAndRiskAnalysis)

    def to_dict(self) -> dict[str, object]:
        """Serialize with the same keys the model is asked to produce."""
        return {
            "summary": self.summary,
            "criticalFindings": list(self.critical_findings),
            "costAndRiskAnalysis": {
                "costs": list(self.cost_and_risk_analysis.costs),
                "risks": list(self.cost_and_risk_analysis.risks),
            },
        }


@dataclass(frozen=True)
class Chunk:
    """A slice of oversized text; index is its position in the original."""

    index: int
    content: str


@dataclass(frozen=True)
class PartialSummary:
    """Output of the map call for the chunk with the same index."""

    index: int
    content: str


@dataclass(frozen=True)
class AnalysisProgress:
    """Progress notification emitted while an analysis runs."""

    phase: str  # "single", "map" or "reduce"
    completed: int
    total: int
