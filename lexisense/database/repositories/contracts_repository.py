from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from lexisense.analysis.models import AnalysisResult
from lexisense.database.connection import get_connection
from lexisense.database.exceptions import DocumentNotFoundError
from lexisense.database.models import DOCUMENT_STATUSES, STATUS_ANALYZED, ContractRecord


class ContractsRepository:
    """Database operations for the analysis columns of the contracts table."""

    async def find_by_id(self, document_id: str) -> ContractRecord:
        """Find a contract by ID.

        Raises:
            DocumentNotFoundError: if no contract with this ID exists.
        """
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT id, status, extracted_text, storage_key,
                           ai_analysis, updated_at
                    FROM contracts
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = await cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return ContractRecord(
            id=str(row["id"]),
            status=row["status"],
            extracted_text=row["extracted_text"],
            storage_key=row["storage_key"],
            ai_analysis=row["ai_analysis"],
            updated_at=row["updated_at"],
        )

    async def get_document_text(self, document_id: str) -> str:
        """Return the extracted text of a contract ('' if none was stored).

        Raises:
            DocumentNotFoundError: if no contract with this ID exists.
        """
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT extracted_text FROM contracts WHERE id = %s",
                    (document_id,),
                )
                row = await cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return row[0] or ""

    async def update_extracted_text(
        self,
        document_id: str,
        storage_key: str,
        extracted_text: str,
    ) -> None:
        """Persist the storage key and extracted plain text of an upload.

        Raises:
            DocumentNotFoundError: if no contract with this ID exists.
        """
        await self._update(
            """
            UPDATE contracts
            SET storage_key = %s, extracted_text = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (storage_key, extracted_text, document_id),
            document_id,
        )

    async def set_document_status(self, document_id: str, status: str) -> None:
        """Set the analysis status of a contract.

        Raises:
            ValueError: if status is not a known document status.
            DocumentNotFoundError: if no contract with this ID exists.
        """
        if status not in DOCUMENT_STATUSES:
            raise ValueError(f"Unknown document status '{status}'")
        await self._update(
            """
            UPDATE contracts
            SET status = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (status, document_id),
            document_id,
        )

    async def save_analysis_result(self, document_id: str, result: AnalysisResult) -> None:
        """Replace the stored analysis and mark the contract analyzed.

        Both columns change in one statement, so readers never observe a new
        analysis with a stale status or vice versa.

        Raises:
            DocumentNotFoundError: if no contract with this ID exists.
        """
        await self._update(
            """
            UPDATE contracts
            SET ai_analysis = %s, status = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (Jsonb(result.to_payload()), STATUS_ANALYZED, document_id),
            document_id,
        )

    async def _update(self, query: str, params: tuple[object, ...], document_id: str) -> None:
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            await conn.commit()
