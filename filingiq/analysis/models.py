from dataclasses import dataclass, field
from typing import Literal

Confidence = Literal["high", "medium", "low"]

CONFIDENCE_LEVELS: tuple[Confidence, ...] = ("high", "medium", "low")
MAX_SUMMARY_CHARS = 600
MAX_NOTES = 5


def format_usd(value: float) -> str:
    """``-250.0`` -> ``-$250.00``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


@dataclass(frozen=True)
class Amount:
    """A labeled monetary amount found on a document."""

    label: str
    value: float
    description: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"label": self.label, "value": self.value}
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class DateEntry:
    """A labeled date found on a document."""

    label: str
    value: str

    def to_dict(self) -> dict[str, object]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class ExtractedData:
    """Fields pulled out of one tax document. Every field is optional."""

    year: str | None = None
    amounts: list[Amount] = field(default_factory=list)
    employer: str | None = None
    payer: str | None = None
    recipient: str | None = None
    dates: list[DateEntry] = field(default_factory=list)
    other: dict[str, str | int | float] = field(default_factory=dict)

    @property
    def total_amount(self) -> float:
        return sum(amount.value for amount in self.amounts)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.year is not None:
            data["year"] = self.year
        if self.amounts:
            data["amounts"] = [amount.to_dict() for amount in self.amounts]
        for key in ("employer", "payer", "recipient"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.dates:
            data["dates"] = [entry.to_dict() for entry in self.dates]
        if self.other:
            data["other"] = dict(self.other)
        return data


@dataclass(frozen=True)
class DocumentAnalysis:
    """Structured understanding of a single document."""

    document_type: str
    confidence: Confidence
    extracted_data: ExtractedData = field(default_factory=ExtractedData)
    summary: str = ""
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "documentType": self.document_type,
            "confidence": self.confidence,
            "extractedData": self.extracted_data.to_dict(),
            "summary": self.summary,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome for one document: an analysis, or None plus an error message."""

    filename: str
    analysis: DocumentAnalysis | None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.analysis is not None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "filename": self.filename,
            "analysis": self.analysis.to_dict() if self.analysis is not None else None,
        }
        if self.error is not None:
            data["error"] = self.error
        return data
