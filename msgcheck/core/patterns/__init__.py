"""Pattern Detection Package"""

from msgcheck.core.patterns.detection import (
    BUILT_IN_PATTERNS,
    BUILT_IN_PATTERNS_BY_ID,
    CATEGORIES,
    SEVERITIES,
    SEVERITY_LEVELS,
    ContextualExamples,
    Pattern,
    PatternMatch,
    detect_patterns,
)
from msgcheck.core.patterns.matcher import AnalysisResult, PatternMatcher
from msgcheck.core.patterns.optimizer import OptimizedPattern, optimize_patterns, quick_detect_patterns
from msgcheck.core.patterns.warning_manager import WarningManager, WarningSnapshot, WarningState

__all__ = [
    "BUILT_IN_PATTERNS",
    "BUILT_IN_PATTERNS_BY_ID",
    "CATEGORIES",
    "SEVERITIES",
    "SEVERITY_LEVELS",
    "ContextualExamples",
    "Pattern",
    "PatternMatch",
    "detect_patterns",
    "AnalysisResult",
    "PatternMatcher",
    "OptimizedPattern",
    "optimize_patterns",
    "quick_detect_patterns",
    "WarningManager",
    "WarningSnapshot",
    "WarningState",
]
