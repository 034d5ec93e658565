import math
from typing import Dict, Any, Optional, Mapping
from dataclasses import dataclass, fields, asdict, replace


@dataclass(frozen=True)
class VitalsRecord:
    """A single snapshot of the patient's measured health markers.

    Units follow the lab report conventions:
    - Blood pressure: mmHg
    - Heart rate: BPM
    - Temperature: °F
    - Glucose, cholesterol, APOB, VLDL, LDL, HDL, triglycerides: mg/dL
    - HbA1c, oxygen saturation: %
    - Stress level: 0-10 (0=calm, 10=overwhelmed)
    """
    # Blood pressure
    systolic: float
    diastolic: float

    # Cardio / general
    heart_rate: float
    temperature: float

    # Metabolic
    blood_glucose: float
    cholesterol: float
    hba1c: float

    # Lipid panel
    apob: float
    vldl: float
    ldl: float
    hdl: float
    triglycerides: float

    # Other
    stress_level: float
    oxygen_saturation: float

    @classmethod
    def field_names(cls) -> list:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], defaults: Optional["VitalsRecord"] = None) -> "VitalsRecord":
        """
        Build a record from loosely-typed input (form values, parsed report).

        Missing keys are taken from `defaults` when given. Raises ValueError on
        missing, non-numeric, non-finite (nan/inf) or negative values.
        """
        base = defaults.to_dict() if defaults is not None else {}
        values: Dict[str, float] = {}
        for name in cls.field_names():
            raw = data.get(name, base.get(name))
            if raw is None:
                raise ValueError(f"Missing vital: {name}")
            try:
                value = float(raw)
            except (ValueError, TypeError):
                raise ValueError(f"Vital '{name}' is not numeric: {raw!r}")
            if not math.isfinite(value):
                raise ValueError(f"Vital '{name}' must be a finite number: {raw!r}")
            if value < 0:
                raise ValueError(f"Vital '{name}' cannot be negative: {value}")
            values[name] = value
        return cls(**values)

    def with_updates(self, **changes: Any) -> "VitalsRecord":
        """Return a validated copy with some fields replaced."""
        unknown = set(changes) - set(self.field_names())
        if unknown:
            raise ValueError(f"Unknown vital(s): {', '.join(sorted(unknown))}")
        return VitalsRecord.from_dict(changes, defaults=self)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class PatientInfo:
    """Who the vitals belong to. Only `age` is used by the analysis."""
    name: str = "Patient"
    age: int = 45
    gender: Optional[str] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    last_checkup: Optional[str] = None  # ISO date, e.g. "2024-10-15"

    def __post_init__(self):
        if int(self.age) <= 0:
            raise ValueError(f"Patient age must be positive: {self.age}")
        self.age = int(self.age)

    def with_age(self, age: int) -> "PatientInfo":
        return replace(self, age=age)


# Shipped sample and fallback record when a report can't be read
SAMPLE_VITALS = VitalsRecord(
    systolic=145,
    diastolic=92,
    heart_rate=88,
    temperature=98.6,
    blood_glucose=118,
    cholesterol=215,
    hba1c=6.2,
    apob=105,
    vldl=32,
    ldl=140,
    hdl=45,
    triglycerides=180,
    stress_level=6,
    oxygen_saturation=97,
)

SAMPLE_PATIENT_INFO = PatientInfo(
    name="John Doe",
    age=45,
    gender="Male",
    weight_kg=82,
    height_cm=175,
    last_checkup="2024-10-15",
)
