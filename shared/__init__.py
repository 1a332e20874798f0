"""Shared module - models, catalog access and storage used by triage and outcomes"""

from shared.models import AssessmentRecord, PostOpRecord, RiskLevel

__all__ = [
    "AssessmentRecord",
    "PostOpRecord",
    "RiskLevel",
]
