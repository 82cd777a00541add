"""
Prompt flows for CyberGuard.

Each flow validates its input with a pydantic schema, substitutes it
into a natural-language prompt template and returns the structured
output of the external LLM.  A flow that gets no output raises
:class:`~cyberguard.services.flows.flow.FlowError`.
"""

from .gap_analyzer import analyze_security_gaps
from .security_advisor import get_security_recommendations
from .threat_analyzer import threat_analyzer_summary

__all__ = [
    "threat_analyzer_summary",
    "get_security_recommendations",
    "analyze_security_gaps",
]
