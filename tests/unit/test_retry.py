from unittest.mock import AsyncMock

import pytest

from lexisense.analysis.exceptions import (
    EmptyResponseError,
    ExtractionError,
    NotConfiguredError,
    SchemaValidationError,
)
from lexisense.analysis.retry import with_retry


async def _run(operation: AsyncMock, max_attempts: int = 3) -> str:
    return await with_retry(
        operation,
        max_attempts=max_attempts,
        initial_delay=0.0,
        max_delay=0.0,
    )


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_returns_first_success(self) -> None:
        operation = AsyncMock(return_value="ok")
        assert await _run(operation) == "ok"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_extraction_error_then_succeeds(self) -> None:
        operation = AsyncMock(side_effect=[ExtractionError("503", status_code=503), "ok"])
        assert await _run(operation) == "ok"
        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_retries_empty_response(self) -> None:
        operation = AsyncMock(side_effect=[EmptyResponseError("empty"), "ok"])
        assert await _run(operation) == "ok"

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        operation = AsyncMock(side_effect=ExtractionError("down"))
        with pytest.raises(ExtractionError, match="down"):
            await _run(operation, max_attempts=3)
        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_not_configured_is_never_retried(self) -> None:
        operation = AsyncMock(side_effect=NotConfiguredError("no key"))
        with pytest.raises(NotConfiguredError):
            await _run(operation)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_schema_error_is_not_retried(self) -> None:
        operation = AsyncMock(side_effect=SchemaValidationError("bad shape"))
        with pytest.raises(SchemaValidationError):
            await _run(operation)
        assert operation.await_count == 1
