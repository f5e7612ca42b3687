import pytest

from database import Database


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'expenses.db'}"


@pytest.fixture
async def database(database_url):
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()
