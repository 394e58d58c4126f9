from docanalyzer.analysis.factory import AnalysisClientFactory, AnalysisOrchestratorFactory
from docanalyzer.analysis.models import Analysis
from docanalyzer.analysis.orchestrator import AnalysisOrchestrator

__all__ = [
    "Analysis",
    "AnalysisClientFactory",
    "AnalysisOrchestrator",
    "AnalysisOrchestratorFactory",
]
