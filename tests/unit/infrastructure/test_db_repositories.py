"""DbEmployeeRepository and DbHistoryStore against a throwaway SQLite file."""

import uuid
from datetime import datetime

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from employee_records.application.exceptions import (
    ConcurrentModificationError,
    HistoryPersistenceError,
)
from employee_records.audit.event_bus import ChangeEventBus
from employee_records.audit.interceptor import EntityLifecycleInterceptor
from employee_records.audit.recorder import HistoryRecorder
from employee_records.domain.exceptions import EmployeeNotFoundError
from employee_records.domain.models.auditable import ChangeType, HistoryRecord
from employee_records.infrastructure.database.employee_repository_db import DbEmployeeRepository
from employee_records.infrastructure.database.history_store_db import DbHistoryStore
from employee_records.infrastructure.database.models import EmployeeRow
from employee_records.infrastructure.database.session import Base


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture
def db_history_store(session_factory):
    return DbHistoryStore(session_factory)


@pytest.fixture
def db_interceptor(converter, clock, db_history_store):
    bus = ChangeEventBus()
    recorder = HistoryRecorder(store=db_history_store, converter=converter, clock=clock)
    bus.subscribe(recorder.on_change_event)
    return EntityLifecycleInterceptor(converter=converter, bus=bus, clock=clock)


@pytest.mark.asyncio
async def test_add_persists_row_and_history(
    session_factory, db_interceptor, db_history_store, employee_factory
):
    async with session_factory() as session:
        saved = await DbEmployeeRepository(session, db_interceptor).add(employee_factory())

    assert saved.id is not None
    assert saved.version == 1

    async with session_factory() as session:
        row = await session.get(EmployeeRow, saved.id)
        assert row.created_at == datetime(2024, 1, 1, 0, 0, 0)
        assert row.modified_at == row.created_at

    records = await db_history_store.list_for_entity(saved.id)
    assert len(records) == 1
    assert records[0].change_type == ChangeType.UPDATED
    assert records[0].timestamp == datetime(2024, 1, 1, 0, 0, 1)
    assert records[0].changes.startswith("Employee [name=John Doe,")


@pytest.mark.asyncio
async def test_update_bumps_version_and_appends_history(
    session_factory, db_interceptor, db_history_store, employee_factory
):
    async with session_factory() as session:
        repository = DbEmployeeRepository(session, db_interceptor)
        saved = await repository.add(employee_factory())
        saved.position = "Architect"
        updated = await repository.update(saved)

    assert updated.version == 2
    assert updated.modified_at > updated.created_at

    records = await db_history_store.list_for_entity(saved.id)
    assert len(records) == 2
    assert "position=Architect" in records[-1].changes


@pytest.mark.asyncio
async def test_history_failure_leaves_committed_row(
    session_factory, db_interceptor, employee_factory
):
    """A failed history append fails the add; the employee row stays stored."""
    async with session_factory() as session:
        await session.execute(text("DROP TABLE employee_history"))
        await session.commit()

    async with session_factory() as session:
        with pytest.raises(HistoryPersistenceError) as exc_info:
            await DbEmployeeRepository(session, db_interceptor).add(employee_factory())

    async with session_factory() as session:
        row = await session.get(EmployeeRow, exc_info.value.entity_id)
        assert row is not None
        assert row.email == "john.doe@example.com"


@pytest.mark.asyncio
async def test_update_with_stale_version_is_rejected(
    session_factory, db_interceptor, employee_factory
):
    async with session_factory() as session:
        saved = await DbEmployeeRepository(session, db_interceptor).add(employee_factory())

    saved.version = 7
    async with session_factory() as session:
        with pytest.raises(ConcurrentModificationError):
            await DbEmployeeRepository(session, db_interceptor).update(saved)


@pytest.mark.asyncio
async def test_concurrent_writer_wins_and_late_writer_conflicts(
    session_factory, db_interceptor, employee_factory
):
    async with session_factory() as session:
        saved = await DbEmployeeRepository(session, db_interceptor).add(employee_factory())

    async with session_factory() as late_session, session_factory() as early_session:
        late = DbEmployeeRepository(late_session, db_interceptor)
        early = DbEmployeeRepository(early_session, db_interceptor)

        late_copy = await late.get(saved.id)
        early_copy = await early.get(saved.id)

        early_copy.department = "Finance"
        await early.update(early_copy)

        late_copy.department = "Legal"
        with pytest.raises(ConcurrentModificationError):
            await late.update(late_copy)


@pytest.mark.asyncio
async def test_update_missing_row_raises_not_found(
    session_factory, db_interceptor, employee_factory
):
    async with session_factory() as session:
        with pytest.raises(EmployeeNotFoundError):
            await DbEmployeeRepository(session, db_interceptor).update(
                employee_factory(id=uuid.uuid4(), version=1)
            )


@pytest.mark.asyncio
async def test_lookup_by_email_and_paging(session_factory, db_interceptor, employee_factory):
    async with session_factory() as session:
        repository = DbEmployeeRepository(session, db_interceptor)
        for i in range(3):
            await repository.add(employee_factory(email=f"user{i}@example.com"))

        found = await repository.get_by_email("user1@example.com")
        missing = await repository.get_by_email("nobody@example.com")
        page = await repository.list_page(1, 2)

    assert found.email == "user1@example.com"
    assert missing is None
    assert [e.email for e in page] == ["user2@example.com"]


@pytest.mark.asyncio
async def test_history_store_lists_oldest_first(db_history_store):
    entity_id = uuid.uuid4()
    later = HistoryRecord(
        id=uuid.uuid4(),
        entity_id=entity_id,
        change_type=ChangeType.UPDATED,
        changes="second",
        timestamp=datetime(2024, 1, 2),
    )
    earlier = HistoryRecord(
        id=uuid.uuid4(),
        entity_id=entity_id,
        change_type=ChangeType.CREATED,
        changes="first",
        timestamp=datetime(2024, 1, 1),
    )
    await db_history_store.append(later)
    await db_history_store.append(earlier)
    await db_history_store.append(
        HistoryRecord(
            id=uuid.uuid4(),
            entity_id=uuid.uuid4(),
            change_type=ChangeType.UPDATED,
            changes="other",
            timestamp=datetime(2024, 1, 1),
        )
    )

    records = await db_history_store.list_for_entity(entity_id)

    assert [r.changes for r in records] == ["first", "second"]
    assert records[0] == earlier
