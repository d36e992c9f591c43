from dataclasses import asdict, dataclass, field

RISK_SEVERITIES = frozenset({"low", "medium", "high"})


@dataclass(frozen=True)
class Party:
    """A contracting party and its role, e.g. 'Acme Corp' / 'Provider'."""

    name: str
    role: str


@dataclass(frozen=True)
class KeyDate:
    """A labelled contract date in YYYY-MM-DD form."""

    label: str
    date: str


@dataclass(frozen=True)
class Risk:
    """A risk finding. Severity is one of RISK_SEVERITIES."""

    severity: str
    description: str


@dataclass(frozen=True)
class AnalysisChunk:
    """An ordered slice of document text."""

    index: int
    text: str


@dataclass(frozen=True)
class PartialAnalysis:
    """Validated extraction output for a single chunk."""

    summary: str
    parties: list[Party] = field(default_factory=list)
    dates: list[KeyDate] = field(default_factory=list)
    risks: list[Risk] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Merged analysis persisted alongside a contract."""

    summary: str = ""
    parties: list[Party] = field(default_factory=list)
    dates: list[KeyDate] = field(default_factory=list)
    risks: list[Risk] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Return a JSONB-ready dict."""
        return asdict(self)
