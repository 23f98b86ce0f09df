# ui/__init__.py
from .runner import AnalysisOutcome, analyze_source
__all__ = ["AnalysisOutcome", "analyze_source"]
