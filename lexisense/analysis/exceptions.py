class AnalysisError(Exception):
    """Raised when contract analysis fails."""


class NotConfiguredError(AnalysisError):
    """Raised when no provider credential is configured. Never retried."""


class ExtractionError(AnalysisError):
    """Raised when the AI provider call fails due to network/provider issues."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(AnalysisError):
    """Raised when the AI provider returns no content."""


class SchemaValidationError(AnalysisError):
    """Raised when the model output does not match the analysis schema."""


class AnalysisRunError(AnalysisError):
    """Raised when a chunk fails permanently and the whole run is abandoned."""

    def __init__(
        self,
        document_id: str,
        chunk_index: int | None,
        stage: str,
        cause: Exception,
    ) -> None:
        where = f"chunk {chunk_index}" if chunk_index is not None else "run"
        super().__init__(
            f"Analysis of document {document_id} failed at {where} ({stage}): {cause}"
        )
        self.document_id = document_id
        self.chunk_index = chunk_index
        self.stage = stage
        self.cause = cause
