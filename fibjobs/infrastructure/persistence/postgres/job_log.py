"""
PostgreSQL Job Log.

Durable Log implementation: an append-only table with a single integer
column and no constraints, so repeated submissions of the same index are
kept as separate rows.

Schema:
    CREATE TABLE IF NOT EXISTS values (number INT)

Business Rules:
    - Rows are only ever inserted (no UPDATE, no DELETE)
    - No primary key, no uniqueness: the table is a multiset
    - list_all() returns rows in whatever order the database yields
    - Never reconciled with the Redis state store

Error Handling:
    - Every SQLAlchemyError is re-raised as LogUnavailableError
"""

import logging
from typing import List

from sqlalchemy import Column, Integer, MetaData, Table, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from fibjobs.domain.jobs.constants import JOB_LOG_TABLE_NAME
from fibjobs.infrastructure.exceptions import LogUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)


metadata = MetaData()

values_table = Table(
    JOB_LOG_TABLE_NAME,
    metadata,
    Column("number", Integer),
)


class PostgresJobLog:
    """
    Durable Log backed by a PostgreSQL table.

    Implements JobLogProtocol. Each call checks a connection out of the
    engine's pool, so one instance is shared by all request threads.

    Examples:
        >>> log = PostgresJobLog(create_log_engine(settings))
        >>> log.ensure_schema()
        >>> log.append(5)
        >>> log.append(5)
        >>> log.list_all()
        [5, 5]
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.table = values_table

    def ensure_schema(self) -> None:
        """
        Create the table when it does not exist yet.

        Raises:
            LogUnavailableError: If DDL fails
        """
        try:
            metadata.create_all(self.engine, tables=[self.table], checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create table '{self.table.name}': {e}")
            raise LogUnavailableError(f"unable to create table {self.table.name}: {e}") from e

        logger.info(f"Job log table ready: {self.table.name}")

    def append(self, number: int) -> None:
        try:
            with self.engine.begin() as connection:
                connection.execute(insert(self.table).values(number=number))
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert {number} into '{self.table.name}': {e}")
            raise LogUnavailableError(f"unable to save data to DB: {e}") from e

        logger.debug(f"Job log: appended {number}")

    def list_all(self) -> List[int]:
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(select(self.table.c.number)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read '{self.table.name}': {e}")
            raise LogUnavailableError(f"unable to retrieve values from db: {e}") from e

        return [row[0] for row in rows]
