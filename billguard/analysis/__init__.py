from billguard.analysis.analyzer import DocumentAnalyzer
from billguard.analysis.base import BaseAnalyzer
from billguard.analysis.factory import AnalyzerFactory
from billguard.analysis.normalizer import normalize, strip_code_fences

__all__ = [
    "AnalyzerFactory",
    "BaseAnalyzer",
    "DocumentAnalyzer",
    "normalize",
    "strip_code_fences",
]
