import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from lexisense.config.settings import Settings
from lexisense.database.connection import close_pool, get_connection, init_pool

_CREATE_CONTRACTS = """
CREATE TABLE IF NOT EXISTS contracts (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    status text NOT NULL DEFAULT 'processing',
    extracted_text text,
    storage_key text,
    ai_analysis jsonb,
    updated_at timestamptz NOT NULL DEFAULT NOW()
)
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "lexisense_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def integration_pool(test_settings: Settings) -> AsyncGenerator[None, None]:
    try:
        await init_pool(test_settings)
    except Exception as e:
        await close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests"
        )
    async with get_connection() as conn:
        await conn.execute(_CREATE_CONTRACTS)
        await conn.commit()
    try:
        yield
    finally:
        await close_pool()


@pytest_asyncio.fixture
async def seed_contract(integration_pool: None) -> AsyncGenerator[str, None]:
    contract_id = str(uuid.uuid4())
    async with get_connection() as conn:
        await conn.execute(
            """
            INSERT INTO contracts (id, status, extracted_text)
            VALUES (%s, 'processing', %s)
            """,
            (contract_id, "This Agreement is made between Acme Corp and Beta LLC."),
        )
        await conn.commit()
    try:
        yield contract_id
    finally:
        async with get_connection() as conn:
            await conn.execute("DELETE FROM contracts WHERE id = %s", (contract_id,))
            await conn.commit()
