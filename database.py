import logging
from contextlib import asynccontextmanager
from datetime import date

from fastapi import Request
from sqlalchemy import CheckConstraint, Column, Date, Float, Integer, String, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)

Base = declarative_base()


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (CheckConstraint("amount >= 0", name="ck_expenses_amount"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    description = Column(String, nullable=True)
    amount = Column(Float, nullable=False)
    category = Column(String, index=True)
    date = Column(Date, nullable=False, default=date.today)

    def __repr__(self):
        return f"<Expense id={self.id} category={self.category!r} amount={self.amount}>"


class ExpenseContext:
    """Unit of work over the ``expenses`` table.

    Wraps a single session. Nothing reaches the store until
    :meth:`save_changes` commits, and a failed commit is rolled back before
    the error is re-raised.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def expenses(self):
        return select(Expense)

    def add(self, expense: Expense):
        self.session.add(expense)

    async def all(self, statement) -> list:
        result = await self.session.scalars(statement)
        return list(result.all())

    async def rows(self, statement) -> list:
        result = await self.session.execute(statement)
        return list(result.all())

    async def save_changes(self):
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise


class Database:
    def __init__(self, url: str = DATABASE_URL, echo: bool = SQL_ECHO):
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine = create_async_engine(url, echo=echo, connect_args=connect_args)
        self.sessionmaker = async_sessionmaker(
            self.engine, autoflush=False, expire_on_commit=False
        )

    @asynccontextmanager
    async def context(self):
        async with self.sessionmaker() as session:
            yield ExpenseContext(session)

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready on %s", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self):
        await self.engine.dispose()


async def get_db(request: Request):
    async with request.app.state.database.context() as db:
        yield db
