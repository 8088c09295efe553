"""Compliance classification and regulatory impact assessment."""

from .assessor import ComplianceAssessor, ComplianceAssessment, PassStatus, Severity
from .impact import (
    ThresholdImpactCalculator, ImpactAssessment, ImpactMetric,
    RegulatoryRequirement, RiskArea, CurrentPosition,
)
from .change import RegulatoryChangeAnalyzer, RegulatoryChangeImpact, ChangeSeverity

__all__ = [
    "ComplianceAssessor",
    "ComplianceAssessment",
    "PassStatus",
    "Severity",
    "ThresholdImpactCalculator",
    "ImpactAssessment",
    "ImpactMetric",
    "RegulatoryRequirement",
    "RiskArea",
    "CurrentPosition",
    "RegulatoryChangeAnalyzer",
    "RegulatoryChangeImpact",
    "ChangeSeverity",
]
