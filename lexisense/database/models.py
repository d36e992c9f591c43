from dataclasses import dataclass
from datetime import datetime
from typing import Any

STATUS_PROCESSING = "processing"
STATUS_ANALYZED = "analyzed"
STATUS_FAILED = "failed"

DOCUMENT_STATUSES = frozenset({STATUS_PROCESSING, STATUS_ANALYZED, STATUS_FAILED})


@dataclass
class ContractRecord:
    """Represents a row from the contracts table (analysis-related columns)."""

    id: str
    status: str
    extracted_text: str | None = None
    storage_key: str | None = None
    ai_analysis: dict[str, Any] | None = None
    updated_at: datetime | None = None
