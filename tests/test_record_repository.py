"""
tests/test_record_repository.py

RecordRepository against an in-memory SQLite database.

Coverage
--------
- Criteria filtering ("all" and blank ignored, unknown field rejected)
- Record keys follow the entity schema (stock attributes mapped back)
- Allowed-sets grouped by name, ordered by position, blanks dropped
- Savepoint persistence: a duplicate SKU fails alone, earlier rows survive
- Fetch failures surface as UpstreamFetchError
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers the dashboard tables
from app.repositories.errors import PersistenceError, UpstreamFetchError
from app.repositories.record_repository import RecordRepository
from app.services.bulk_import_service import BulkImportService
from db.base import Base
from db.models import ChatLogEntry, MasterDataValue


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite only honours SAVEPOINT when SQLAlchemy emits BEGIN itself.
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=Session, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def session(session_factory: sessionmaker) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def repository(session: Session) -> RecordRepository:
    return RecordRepository(session)


def _stock(sku: str, **overrides: str) -> dict[str, str]:
    record = {"SKU": sku, "Product_name": f"Product {sku}", "Category": "Kitchen", "HPP": "12500"}
    record.update(overrides)
    return record


class TestFetchRecords:
    @pytest.fixture(autouse=True)
    def _chat_rows(self, session: Session) -> None:
        session.add_all(
            [
                ChatLogEntry(date="01 Jan 2026", shift="Pagi", cs="Ani", channel="Shopee", closing_status="Closed"),
                ChatLogEntry(date="02 Jan 2026", shift="Malam", cs="Budi", channel="TikTok", closing_status="Open"),
                ChatLogEntry(date="03 Jan 2026", shift="Pagi", cs="Budi", channel="Shopee", closing_status="Open"),
            ]
        )
        session.commit()

    def test_returns_every_row_with_row_index(self, repository: RecordRepository) -> None:
        records = repository.fetch_records("chat_log")

        assert [record["date"] for record in records] == ["01 Jan 2026", "02 Jan 2026", "03 Jan 2026"]
        assert [record["row_index"] for record in records] == [1, 2, 3]
        assert records[0]["intention"] == ""

    def test_criteria_narrow_and_all_is_ignored(self, repository: RecordRepository) -> None:
        records = repository.fetch_records("chat_log", {"channel": "Shopee", "cs": "all", "shift": ""})
        assert [record["cs"] for record in records] == ["Ani", "Budi"]

        records = repository.fetch_records("chat_log", {"channel": "Shopee", "cs": "Budi"})
        assert [record["date"] for record in records] == ["03 Jan 2026"]

    def test_unknown_criteria_field(self, repository: RecordRepository) -> None:
        with pytest.raises(ValueError):
            repository.fetch_records("chat_log", {"sku": "A"})

    def test_unknown_entity(self, repository: RecordRepository) -> None:
        with pytest.raises(ValueError):
            repository.fetch_records("invoice")

    def test_missing_table_is_upstream_failure(self, engine: Engine, repository: RecordRepository) -> None:
        Base.metadata.drop_all(engine, tables=[ChatLogEntry.__table__])

        with pytest.raises(UpstreamFetchError):
            repository.fetch_records("chat_log")


class TestAllowedSets:
    def test_grouped_ordered_and_blanks_dropped(self, session: Session, repository: RecordRepository) -> None:
        session.add_all(
            [
                MasterDataValue(field_name="shift", value="Malam", position=2),
                MasterDataValue(field_name="shift", value="Pagi", position=1),
                MasterDataValue(field_name="shift", value="   ", position=3),
                MasterDataValue(field_name="channel", value="Shopee", position=1),
            ]
        )
        session.commit()

        assert repository.fetch_allowed_sets() == {
            "channel": ["Shopee"],
            "shift": ["Pagi", "Malam"],
        }

    def test_empty_master_data(self, repository: RecordRepository) -> None:
        assert repository.fetch_allowed_sets() == {}


class TestPersistRecord:
    def test_stock_fields_round_trip_through_model_attributes(
        self,
        session_factory: sessionmaker,
        repository: RecordRepository,
    ) -> None:
        repository.persist_record("stock", _stock("SKU-1", HPJ="15000"))
        repository.commit()

        with session_factory() as fresh:
            records = RecordRepository(fresh).fetch_records("stock")

        assert len(records) == 1
        assert records[0]["SKU"] == "SKU-1"
        assert records[0]["Product_name"] == "Product SKU-1"
        assert records[0]["HPJ"] == "15000"
        assert records[0]["Grade"] == ""

    def test_duplicate_sku_fails_alone(self, session_factory: sessionmaker, repository: RecordRepository) -> None:
        repository.persist_record("stock", _stock("A"))
        with pytest.raises(PersistenceError):
            repository.persist_record("stock", _stock("A", Product_name="Duplicate"))
        repository.persist_record("stock", _stock("B"))
        repository.commit()

        with session_factory() as fresh:
            records = RecordRepository(fresh).fetch_records("stock")

        assert [record["SKU"] for record in records] == ["A", "B"]
        assert records[0]["Product_name"] == "Product A"

    def test_bulk_commit_counts_duplicate_as_failed(
        self,
        session_factory: sessionmaker,
        repository: RecordRepository,
    ) -> None:
        service = BulkImportService(preview_limit=10, log_validation_errors=False)

        result = service.commit(
            "stock",
            [_stock("A"), _stock("A"), _stock("B", HPP="1,000")],
            {},
            lambda record: repository.persist_record("stock", record),
        )
        repository.commit()

        assert result.committed is True
        assert result.success_count == 2
        assert result.fail_count == 1
        with session_factory() as fresh:
            records = RecordRepository(fresh).fetch_records("stock")
        assert [(record["SKU"], record["HPP"]) for record in records] == [("A", "12500"), ("B", "1000")]

    def test_none_values_are_stored_as_empty_text(
        self,
        session_factory: sessionmaker,
        repository: RecordRepository,
    ) -> None:
        repository.persist_record(
            "chat_log",
            {"date": "01 Jan 2026", "shift": "Pagi", "cs": "Ani", "channel": "Shopee", "note": None},
        )
        repository.commit()

        with session_factory() as fresh:
            record = RecordRepository(fresh).fetch_records("chat_log")[0]

        assert record["note"] == ""
        assert record["cs"] == "Ani"
