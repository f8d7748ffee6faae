"""
Analysis module - schema-constrained feedback analysis.
"""

from .analyzer import FeedbackAnalyzer
from .contract import validate_analysis_payload
from .prompts import build_analysis_prompt

__all__ = ["FeedbackAnalyzer", "build_analysis_prompt", "validate_analysis_payload"]
