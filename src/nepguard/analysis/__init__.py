"""Analysis module - check compilation units."""

from nepguard.analysis.ops import AnalysisOps, AnalysisResult, ClassResult

__all__ = ["AnalysisOps", "AnalysisResult", "ClassResult"]
