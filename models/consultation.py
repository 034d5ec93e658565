from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, Any

URGENCY_LEVELS = ("normal", "moderate", "urgent")


@dataclass(frozen=True)
class ConsultationRequest:
    """A request to consult a specialist, raised from the dashboard.

    Nothing is sent anywhere; the dashboard logs and keeps the request.
    """
    name: str
    age: int
    phone: str
    email: str
    symptoms: str
    urgency: str = "normal"
    submitted_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        for name in ("name", "phone", "email", "symptoms"):
            if not str(getattr(self, name)).strip():
                raise ValueError(f"Consultation field '{name}' is required")
        if int(self.age) <= 0:
            raise ValueError(f"Patient age must be positive: {self.age}")
        if self.urgency not in URGENCY_LEVELS:
            raise ValueError(
                f"Urgency must be one of {', '.join(URGENCY_LEVELS)}: {self.urgency!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["submitted_at"] = self.submitted_at.isoformat()
        return data
