"""End-to-end analysis against PostgreSQL using the example AI client."""

from pathlib import Path

import pytest

from lexisense.config.settings import Settings
from lexisense.database.repositories.contracts_repository import ContractsRepository
from lexisense.service import build_service


class TestAnalysisPipeline:
    @pytest.mark.asyncio
    async def test_example_provider_marks_analyzed(
        self, seed_contract: str, tmp_path: Path
    ) -> None:
        settings = Settings(analysis_provider="example")
        service = build_service(settings, files_root=tmp_path)

        result = await (await service.analyze_document(seed_contract))

        assert result is not None
        record = await ContractsRepository().find_by_id(seed_contract)
        assert record.status == "analyzed"
        assert record.ai_analysis is not None
        assert record.ai_analysis["summary"] == result.summary

    @pytest.mark.asyncio
    async def test_missing_credential_marks_failed(
        self, seed_contract: str, tmp_path: Path
    ) -> None:
        settings = Settings(analysis_provider="openai", openai_api_key="")
        service = build_service(settings, files_root=tmp_path)

        result = await (await service.analyze_document(seed_contract))

        assert result is None
        record = await ContractsRepository().find_by_id(seed_contract)
        assert record.status == "failed"
        assert record.ai_analysis is None

    @pytest.mark.asyncio
    async def test_upload_stores_text_and_analyzes(
        self, seed_contract: str, tmp_path: Path
    ) -> None:
        settings = Settings(analysis_provider="example")
        service = build_service(settings, files_root=tmp_path)

        task = await service.ingest_upload(
            seed_contract,
            "org-1",
            "lease.txt",
            "text/plain",
            b"Lease agreement between Landlord Ltd and Tenant Inc.",
        )
        await task

        record = await ContractsRepository().find_by_id(seed_contract)
        assert record.extracted_text == "Lease agreement between Landlord Ltd and Tenant Inc."
        assert record.storage_key is not None
        assert record.storage_key.startswith("org-1/")
        assert record.status == "analyzed"
