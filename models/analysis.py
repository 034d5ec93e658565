from typing import Dict, List, Any, Union
from dataclasses import dataclass, field, asdict
from enum import Enum


class InsightType(str, Enum):
    WARNING = "warning"
    CAUTION = "caution"
    INFO = "info"
    SUCCESS = "success"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Organ(str, Enum):
    HEART = "heart"
    PANCREAS = "pancreas"
    LIVER = "liver"
    BRAIN = "brain"


class VitalStatus(str, Enum):
    """Per-vital card status shown on the dashboard."""
    OPTIMAL = "optimal"
    MODERATE = "moderate"
    RISK = "risk"


@dataclass(frozen=True)
class Insight:
    type: InsightType
    category: str  # e.g. "Cardiovascular", "Metabolic"
    message: str
    recommendation: str
    severity: Severity


@dataclass(frozen=True)
class OrganAnnotation:
    organ: Organ
    severity: Severity  # only HIGH or MEDIUM; absent organ means "none"
    color: str
    label: str


@dataclass(frozen=True)
class Medication:
    name: str
    dosage: str
    purpose: str
    note: str


@dataclass(frozen=True)
class Exercise:
    activity: str
    duration: str
    frequency: str
    benefits: str


@dataclass(frozen=True)
class LifestyleItem:
    category: str
    recommendation: str
    priority: Severity


@dataclass
class CareStrategy:
    medications: List[Medication] = field(default_factory=list)
    exercises: List[Exercise] = field(default_factory=list)
    lifestyle: List[LifestyleItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return _plain(asdict(self))


@dataclass(frozen=True)
class RiskLevel:
    level: str    # "High" | "Moderate" | "Low"
    color: str    # "red" | "yellow" | "green"
    message: str


@dataclass(frozen=True)
class VitalCard:
    label: str
    value: str
    unit: str
    status: VitalStatus


@dataclass(frozen=True)
class KeyConcern:
    metric: str
    value: Union[float, str]
    target: str
    status: str  # "critical" | "warning"


@dataclass(frozen=True)
class HeartAgeComparison:
    heart_age: int
    chronological_age: int
    years_older: int
    message: str

    @property
    def is_healthy(self) -> bool:
        return self.years_older <= 0


@dataclass
class DashboardSnapshot:
    """Everything the dashboard renders for one vitals record."""
    risk_score: int
    risk_level: RiskLevel
    heart_age: HeartAgeComparison
    insights: List[Insight]
    top_insights: List[Insight]
    affected_organs: List[OrganAnnotation]
    care_strategy: CareStrategy
    vital_cards: List[VitalCard]
    key_concerns: List[KeyConcern]

    @property
    def organ_severity(self) -> Dict[str, str]:
        """Severity per organ, 'none' for organs without a flagged risk."""
        flagged = {a.organ.value: a.severity.value for a in self.affected_organs}
        return {organ.value: flagged.get(organ.value, "none") for organ in Organ}

    def to_dict(self) -> Dict[str, Any]:
        data = _plain(asdict(self))
        data["organ_severity"] = self.organ_severity
        return data


def _plain(value: Any) -> Any:
    """Replace enum members with their string values, recursively."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
