"""Inbound interface of the analysis pipeline: upload, re-extract, analyze and chat."""

import asyncio
from pathlib import Path

from lexisense.analysis.chat import ChatResponder
from lexisense.analysis.factory import ExtractionClientFactory
from lexisense.analysis.models import AnalysisResult
from lexisense.analysis.orchestrator import AnalysisOrchestrator
from lexisense.config.settings import Settings
from lexisense.database.repositories.contracts_repository import ContractsRepository
from lexisense.logging.logger import Log
from lexisense.storage.exceptions import StorageError
from lexisense.storage.file_store import LocalFileStore
from lexisense.text.extractor import MIME_PDF, MIME_TEXT, TextExtractor
from lexisense.text.factory import PdfExtractorFactory

_MIME_BY_SUFFIX = {".pdf": MIME_PDF, ".txt": MIME_TEXT}


class ContractService:
    """Entry points called by the web layer."""

    def __init__(
        self,
        orchestrator: AnalysisOrchestrator,
        chat_responder: ChatResponder,
        repository: ContractsRepository,
        text_extractor: TextExtractor,
        file_store: LocalFileStore,
    ) -> None:
        self._orchestrator = orchestrator
        self._chat_responder = chat_responder
        self._repository = repository
        self._text_extractor = text_extractor
        self._file_store = file_store

    async def ingest_upload(
        self,
        document_id: str,
        organization_id: str,
        original_name: str,
        mime_type: str,
        data: bytes,
    ) -> asyncio.Task[AnalysisResult | None]:
        """Store an uploaded file, persist its text, and start analysis.

        Raises:
            TextExtractionError: if the upload has no usable text.
            StorageError: if the file cannot be stored.
        """
        text = await asyncio.to_thread(self._text_extractor.extract_text, data, mime_type)
        storage_key = await asyncio.to_thread(
            self._file_store.save, organization_id, original_name, data
        )
        await self._repository.update_extracted_text(document_id, storage_key, text)
        Log.info(f"Stored document {document_id} as {storage_key} ({len(text)} chars)")
        return self._orchestrator.trigger(document_id, text)

    async def analyze_document(
        self,
        document_id: str,
        text: str | None = None,
    ) -> asyncio.Task[AnalysisResult | None]:
        """Fire-and-forget analysis. Text is read from the database when omitted."""
        if text is None:
            text = await self._repository.get_document_text(document_id)
        return self._orchestrator.trigger(document_id, text)

    async def reextract_document(
        self,
        document_id: str,
        mime_type: str | None = None,
    ) -> asyncio.Task[AnalysisResult | None]:
        """Re-read the stored upload, replace its extracted text, and re-analyze.

        The MIME type defaults to the one implied by the storage key suffix.

        Raises:
            StorageError: if the document has no stored file.
            UnsupportedFileTypeError: if the type cannot be determined.
        """
        record = await self._repository.find_by_id(document_id)
        storage_key = record.storage_key
        if not storage_key or not await asyncio.to_thread(self._file_store.exists, storage_key):
            raise StorageError(f"No stored file for document {document_id}")
        if mime_type is None:
            mime_type = _MIME_BY_SUFFIX.get(Path(storage_key).suffix.lower(), "")

        data = await asyncio.to_thread(self._file_store.load, storage_key)
        text = await asyncio.to_thread(self._text_extractor.extract_text, data, mime_type)
        await self._repository.update_extracted_text(document_id, storage_key, text)
        Log.info(f"Re-extracted document {document_id} from {storage_key} ({len(text)} chars)")
        return self._orchestrator.trigger(document_id, text)

    async def chat(
        self,
        question: str,
        *,
        document_id: str | None = None,
        text: str | None = None,
    ) -> dict[str, str]:
        """Answer a question about one contract.

        Raises:
            ValueError: if neither document_id nor text is given.
        """
        if text is None:
            if document_id is None:
                raise ValueError("Either document_id or text is required")
            text = await self._repository.get_document_text(document_id)
        answer = await self._chat_responder.answer(text, question)
        return {"answer": answer}


def build_service(settings: Settings, files_root: Path | None = None) -> ContractService:
    """Build a ContractService with all required adapters."""
    repository = ContractsRepository()
    extraction_client = ExtractionClientFactory.create(settings)
    orchestrator = AnalysisOrchestrator(extraction_client, repository, settings)
    chat_responder = ChatResponder(
        extraction_client,
        max_chars=settings.chat_max_chars,
        fallback_message=settings.chat_fallback_message,
    )
    text_extractor = TextExtractor(
        PdfExtractorFactory.create(settings),
        min_chars=settings.min_text_chars,
        max_chars=settings.max_text_chars,
    )
    file_store = LocalFileStore(
        files_root=files_root if files_root is not None else Path(settings.files_root)
    )
    return ContractService(
        orchestrator=orchestrator,
        chat_responder=chat_responder,
        repository=repository,
        text_extractor=text_extractor,
        file_store=file_store,
    )
