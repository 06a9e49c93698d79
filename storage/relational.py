# storage/relational.py
import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from sqlalchemy import DateTime, Integer
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from storage.base import (
    DESCENDING,
    AnyOf,
    DuplicateKeyError,
    Predicate,
    Record,
    Sort,
    StorageAdapter,
    StorageError,
    WriteResult,
)
from storage.tables import TABLES
from utils.coerce import canonical_text, format_booking_date, parse_datetime, render_value

logger = logging.getLogger(__name__)


class _NoMatch(Exception):
    """A predicate value can never exist in the column (e.g. id "abc")."""


class RelationalStorage(StorageAdapter):
    """Storage over SQL tables through SQLModel.

    Phone, postcode and password columns are text; values are stringified
    before they reach the database. ``booking_date`` is a timestamp column and
    is surfaced as ``YYYY-MM-DD`` when ``format_dates`` is on.
    """

    def __init__(self, database_url: str, format_dates: bool = True, engine=None):
        self.database_url = database_url
        self.format_dates = format_dates
        self.engine = engine

    def connect(self) -> None:
        if self.engine is None:
            kwargs = {}
            if self.database_url.startswith("sqlite"):
                kwargs["connect_args"] = {"check_same_thread": False}
                if self.database_url in ("sqlite://", "sqlite:///:memory:"):
                    kwargs["poolclass"] = StaticPool
            else:
                # recycle connections after 5 minutes
                kwargs["pool_recycle"] = 300
            self.engine = create_engine(self.database_url, **kwargs)
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Connected to relational store %s", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            logger.info("Relational store connection closed")

    # --- helpers ---

    def _table(self, collection: str):
        try:
            return TABLES[collection]
        except KeyError:
            raise StorageError(f"Unknown table: {collection}")

    def _column(self, table, field: str):
        try:
            return table.__table__.c[field]
        except KeyError:
            raise StorageError(f"Unknown column {table.__tablename__}.{field}")

    def _coerce(self, column, value: Any) -> Any:
        if value is None:
            return None
        column_type = column.type
        if isinstance(column_type, DateTime):
            try:
                return parse_datetime(value)
            except ValueError:
                raise StorageError(f"Invalid value for {column.name}: {value!r}")
        if isinstance(column_type, Integer):
            try:
                return int(value)
            except (TypeError, ValueError):
                raise _NoMatch()
        # every remaining column is text
        return canonical_text(value)

    def _where(self, table, predicate: Optional[Predicate]):
        clauses = []
        for field, value in (predicate or {}).items():
            column = self._column(table, field)
            if isinstance(value, AnyOf):
                options = []
                for option in value.values:
                    try:
                        options.append(self._coerce(column, option))
                    except _NoMatch:
                        continue
                if not options:
                    raise _NoMatch()
                clauses.append(column.in_(options))
            else:
                clauses.append(column == self._coerce(column, value))
        return clauses

    def _fields(self, table, fields: Record) -> Record:
        values = {}
        for field, value in fields.items():
            if field == "id":
                continue
            column = self._column(table, field)
            try:
                values[field] = self._coerce(column, value)
            except _NoMatch:
                raise StorageError(f"Invalid value for {field}: {value!r}")
        return values

    def _to_record(self, row) -> Record:
        record = {}
        for field, value in row.model_dump().items():
            if field == "booking_date" and self.format_dates:
                record[field] = format_booking_date(value)
            else:
                record[field] = render_value(value)
        return record

    def _row_id(self, id: Any) -> Optional[int]:
        try:
            return int(id)
        except (TypeError, ValueError):
            return None

    @contextmanager
    def _session(self):
        if self.engine is None:
            raise StorageError("Relational store is not connected")
        session = Session(self.engine)
        try:
            yield session
        except IntegrityError as exc:
            session.rollback()
            message = str(exc.orig)
            if "unique" in message.lower() or "duplicate" in message.lower():
                raise DuplicateKeyError(message) from exc
            raise StorageError(message) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(str(exc)) from exc
        finally:
            session.close()

    # --- CRUD ---

    def find_one(self, collection: str, predicate: Predicate) -> Optional[Record]:
        table = self._table(collection)
        try:
            clauses = self._where(table, predicate)
        except _NoMatch:
            return None
        with self._session() as session:
            row = session.exec(select(table).where(*clauses)).first()
            return self._to_record(row) if row else None

    def find_many(self, collection: str, predicate: Optional[Predicate] = None,
                  sort: Optional[Sort] = None) -> List[Record]:
        table = self._table(collection)
        try:
            clauses = self._where(table, predicate)
        except _NoMatch:
            return []
        statement = select(table).where(*clauses)
        for field, direction in sort or []:
            column = self._column(table, field)
            statement = statement.order_by(column.desc() if direction == DESCENDING else column.asc())
        with self._session() as session:
            return [self._to_record(row) for row in session.exec(statement).all()]

    def insert(self, collection: str, fields: Record) -> int:
        table = self._table(collection)
        row = table(**self._fields(table, fields))
        with self._session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row.id

    def update(self, collection: str, id: Any, fields: Record) -> WriteResult:
        table = self._table(collection)
        row_id = self._row_id(id)
        if row_id is None:
            return WriteResult.NOT_FOUND
        values = self._fields(table, fields)
        with self._session() as session:
            row = session.get(table, row_id)
            if row is None:
                return WriteResult.NOT_FOUND
            for field, value in values.items():
                setattr(row, field, value)
            session.add(row)
            session.commit()
            return WriteResult.SUCCESS

    def delete(self, collection: str, id: Any) -> WriteResult:
        table = self._table(collection)
        row_id = self._row_id(id)
        if row_id is None:
            return WriteResult.NOT_FOUND
        with self._session() as session:
            row = session.get(table, row_id)
            if row is None:
                return WriteResult.NOT_FOUND
            session.delete(row)
            session.commit()
            return WriteResult.SUCCESS
