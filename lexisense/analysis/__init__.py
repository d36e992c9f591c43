from lexisense.analysis.chat import ChatResponder
from lexisense.analysis.extraction_client import ExtractionClient
from lexisense.analysis.factory import ExtractionClientFactory
from lexisense.analysis.orchestrator import AnalysisOrchestrator

__all__ = [
    "AnalysisOrchestrator",
    "ChatResponder",
    "ExtractionClient",
    "ExtractionClientFactory",
]
