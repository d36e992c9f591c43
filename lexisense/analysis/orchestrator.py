"""Sequences chunk -> extract -> validate -> merge -> persist for one contract.

Document state machine: processing -> analyzed | failed. A run either persists
a complete merged result or none at all.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import TYPE_CHECKING

from lexisense.analysis.chunker import build_chunks
from lexisense.analysis.exceptions import (
    AnalysisRunError,
    NotConfiguredError,
    SchemaValidationError,
)
from lexisense.analysis.extraction_client import ExtractionClient
from lexisense.analysis.merger import merge
from lexisense.analysis.models import AnalysisChunk, AnalysisResult, PartialAnalysis
from lexisense.analysis.retry import with_retry
from lexisense.analysis.validator import validate
from lexisense.config.settings import Settings
from lexisense.database.models import STATUS_FAILED, STATUS_PROCESSING
from lexisense.logging.logger import Log

if TYPE_CHECKING:
    from lexisense.database.repositories.contracts_repository import ContractsRepository

STAGE_EXTRACT = "extract"
STAGE_VALIDATE = "validate"
STAGE_PERSIST = "persist"
STAGE_ANALYZE = "analyze"


class _ChunkFailure(Exception):
    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(str(cause))
        self.stage = stage
        self.cause = cause


class AnalysisOrchestrator:
    """Runs contract analyses, at most one in flight per document."""

    def __init__(
        self,
        extraction_client: ExtractionClient,
        repository: ContractsRepository,
        settings: Settings,
    ) -> None:
        self._extraction_client = extraction_client
        self._repository = repository
        self._settings = settings
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()
        self._in_flight: set[str] = set()
        self._background: set[asyncio.Task[AnalysisResult | None]] = set()

    def is_running(self, document_id: str) -> bool:
        """True while an analysis of *document_id* holds the document lock."""
        return document_id in self._in_flight

    def trigger(self, document_id: str, text: str) -> asyncio.Task[AnalysisResult | None]:
        """Start a detached analysis run and return its task.

        The task never raises: failures are logged and reflected in the
        document status. A trigger for a document that is already being
        analyzed waits for the in-flight run to finish.
        """
        task = asyncio.create_task(
            self._run_detached(document_id, text),
            name=f"analyze-{document_id}",
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def analyze(self, document_id: str, text: str) -> AnalysisResult:
        """Analyze *text* and persist the merged result for *document_id*.

        Raises:
            AnalysisRunError: if any chunk fails permanently; the document is
                marked failed and no result is persisted.
        """
        lock = self._locks.setdefault(document_id, asyncio.Lock())
        self._lock_users[document_id] += 1
        try:
            async with lock:
                self._in_flight.add(document_id)
                try:
                    return await self._analyze_locked(document_id, text)
                finally:
                    self._in_flight.discard(document_id)
        finally:
            self._lock_users[document_id] -= 1
            if self._lock_users[document_id] == 0:
                del self._lock_users[document_id]
                del self._locks[document_id]

    async def _run_detached(self, document_id: str, text: str) -> AnalysisResult | None:
        try:
            return await self.analyze(document_id, text)
        except asyncio.CancelledError:
            Log.warning(f"Analysis of document {document_id} cancelled; status left processing")
            raise
        except AnalysisRunError:
            return None
        except Exception as exc:
            Log.exception(f"Unexpected error analyzing document {document_id}: {exc}")
            return None

    async def _analyze_locked(self, document_id: str, text: str) -> AnalysisResult:
        Log.info(f"Starting analysis of document {document_id} ({len(text)} chars)")
        await self._repository.set_document_status(document_id, STATUS_PROCESSING)

        try:
            if not self._extraction_client.is_configured:
                raise AnalysisRunError(
                    document_id,
                    None,
                    STAGE_EXTRACT,
                    NotConfiguredError("AI provider credential is not configured"),
                )
            chunks = build_chunks(text, self._settings.max_chunk_chars)
            Log.info(f"Document {document_id} split into {len(chunks)} chunk(s)")
            result = merge(await self._analyze_chunks(document_id, chunks))
        except AnalysisRunError as exc:
            await self._mark_failed(exc)
            raise

        try:
            await self._repository.save_analysis_result(document_id, result)
        except Exception as exc:
            error = AnalysisRunError(document_id, None, STAGE_PERSIST, exc)
            await self._mark_failed(error)
            raise error from exc

        Log.info(
            f"Analysis of document {document_id} complete: "
            f"{len(result.parties)} parties, {len(result.dates)} dates, "
            f"{len(result.risks)} risks"
        )
        return result

    async def _mark_failed(self, error: AnalysisRunError) -> None:
        Log.error(str(error))
        await self._repository.set_document_status(error.document_id, STATUS_FAILED)

    async def _analyze_chunks(
        self,
        document_id: str,
        chunks: list[AnalysisChunk],
    ) -> list[PartialAnalysis]:
        semaphore = asyncio.Semaphore(self._settings.max_concurrent_chunks)
        first_failed: int | None = None

        async def run_one(chunk: AnalysisChunk) -> PartialAnalysis | None:
            nonlocal first_failed
            async with semaphore:
                # A run that already failed at an earlier chunk can never persist.
                if first_failed is not None and first_failed < chunk.index:
                    return None
                try:
                    return await self._analyze_chunk(document_id, chunk)
                except Exception:
                    if first_failed is None or chunk.index < first_failed:
                        first_failed = chunk.index
                    raise

        tasks = [
            asyncio.create_task(
                run_one(chunk), name=f"analyze-{document_id}-chunk-{chunk.index}"
            )
            for chunk in chunks
        ]

        # First failure in chunk order wins, regardless of completion order.
        partials: list[PartialAnalysis] = []
        try:
            for chunk, task in zip(chunks, tasks):
                try:
                    partial = await task
                except _ChunkFailure as exc:
                    raise AnalysisRunError(
                        document_id, chunk.index, exc.stage, exc.cause
                    ) from exc.cause
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    raise AnalysisRunError(
                        document_id, chunk.index, STAGE_ANALYZE, exc
                    ) from exc
                if partial is not None:
                    partials.append(partial)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        return partials

    async def _analyze_chunk(self, document_id: str, chunk: AnalysisChunk) -> PartialAnalysis:
        Log.info(
            f"Analyzing chunk {chunk.index} of document {document_id} "
            f"({len(chunk.text)} chars)"
        )
        raw = await self._extract(chunk)
        try:
            return validate(raw)
        except SchemaValidationError as exc:
            if not self._settings.schema_retry_enabled:
                raise _ChunkFailure(STAGE_VALIDATE, exc) from exc
            Log.warning(
                f"Chunk {chunk.index} of document {document_id} failed validation, "
                f"retrying with schema reminder: {exc}"
            )

        raw = await self._extract(chunk, strict_reminder=True)
        try:
            return validate(raw)
        except SchemaValidationError as exc:
            raise _ChunkFailure(STAGE_VALIDATE, exc) from exc

    async def _extract(self, chunk: AnalysisChunk, *, strict_reminder: bool = False) -> str:
        try:
            return await with_retry(
                lambda: self._extraction_client.extract(
                    chunk.text, strict_reminder=strict_reminder
                ),
                max_attempts=self._settings.extraction_max_attempts,
                initial_delay=self._settings.extraction_backoff_initial_seconds,
                max_delay=self._settings.extraction_backoff_max_seconds,
            )
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise _ChunkFailure(STAGE_EXTRACT, exc) from exc
