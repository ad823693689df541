"""
Integration tests for RecordStore against a temporary SQLite file.
"""
import pytest

from domain.entities import Category, FluidIntakeEntry, MoodLogEntry, UserProfile
from domain.exceptions import NotFoundError, SchemaError, StoreIOError
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.fluid_repo import SQLiteFluidIntakeRepository
from infrastructure.persistence.migrations import ensure_schema


def _fluid(amount="250", timestamp="2024-01-01T09:00:00"):
    return FluidIntakeEntry(amount=amount, timestamp=timestamp)


class TestSchema:

    async def test_ensure_schema_is_idempotent(self, store):
        for _ in range(3):
            await store.ensure_schema(Category.FLUID_INTAKE)
        assert await store.query_all(Category.FLUID_INTAKE) == []

    async def test_schema_on_closed_connection(self, tmp_path):
        connection = AsyncSQLiteConnection(str(tmp_path / "closed.db"))
        with pytest.raises(SchemaError):
            await ensure_schema(connection, Category.MOOD_ENTRY)


class TestFluidRecords:

    async def test_insert_and_query_by_date(self, store):
        entry_id = await store.insert(Category.FLUID_INTAKE, _fluid("350", "2024-01-01T08:30:00"))
        await store.insert(Category.FLUID_INTAKE, _fluid("100", "2024-01-02T08:30:00"))

        day = await store.query_by_date(Category.FLUID_INTAKE, "2024-01-01")

        assert [(e.id, e.amount, e.timestamp) for e in day] == [
            (entry_id, "350", "2024-01-01T08:30:00"),
        ]

    async def test_query_all_newest_first(self, store):
        first = await store.insert(Category.FLUID_INTAKE, _fluid(timestamp="2024-01-01T08:00:00"))
        second = await store.insert(Category.FLUID_INTAKE, _fluid(timestamp="2024-01-03T08:00:00"))

        entries = await store.query_all(Category.FLUID_INTAKE)

        assert [e.id for e in entries] == [second, first]

    async def test_update_replaces_fields(self, store):
        entry_id = await store.insert(Category.FLUID_INTAKE, _fluid())

        await store.update(Category.FLUID_INTAKE, entry_id, _fluid("500", "2024-01-01T15:00:00"))

        (entry,) = await store.query_all(Category.FLUID_INTAKE)
        assert (entry.id, entry.amount, entry.timestamp) == (entry_id, "500", "2024-01-01T15:00:00")

    async def test_missing_ids(self, store):
        with pytest.raises(NotFoundError):
            await store.update(Category.FLUID_INTAKE, 42, _fluid())
        with pytest.raises(NotFoundError) as exc:
            await store.delete(Category.FLUID_INTAKE, 42)
        assert exc.value.record_id == 42

    async def test_deleted_ids_are_not_reused(self, store):
        old_id = await store.insert(Category.FLUID_INTAKE, _fluid())
        await store.delete(Category.FLUID_INTAKE, old_id)

        new_id = await store.insert(Category.FLUID_INTAKE, _fluid())

        assert new_id > old_id

    async def test_wrong_record_type(self, store):
        with pytest.raises(TypeError):
            await store.insert(Category.FLUID_INTAKE, MoodLogEntry(date="2024-01-01", mood="😊"))


class TestMoodRecords:

    async def test_most_recent_date_first(self, store):
        a = await store.insert(Category.MOOD_ENTRY, MoodLogEntry(date="2024-01-01", mood="😢"))
        b = await store.insert(Category.MOOD_ENTRY, MoodLogEntry(date="2024-01-03", mood="😊"))
        c = await store.insert(Category.MOOD_ENTRY, MoodLogEntry(date="2024-01-03", mood="😄"))

        entries = await store.query_all(Category.MOOD_ENTRY)

        assert [e.id for e in entries] == [c, b, a]

    async def test_update_can_move_the_date(self, store):
        entry_id = await store.insert(
            Category.MOOD_ENTRY, MoodLogEntry(date="2024-01-01", mood="😐", comment="meh"),
        )

        await store.update(
            Category.MOOD_ENTRY, entry_id, MoodLogEntry(date="2024-01-02", mood="😊", comment=""),
        )

        assert await store.query_by_date(Category.MOOD_ENTRY, "2024-01-01") == []
        (moved,) = await store.query_by_date(Category.MOOD_ENTRY, "2024-01-02")
        assert (moved.id, moved.mood, moved.comment) == (entry_id, "😊", "")


class TestProfileRecords:

    async def test_no_profile(self, store):
        assert await store.query_profile() is None

    async def test_first_profile_is_returned(self, store):
        first = await store.insert(Category.PROFILE, UserProfile(fullName="Ann"))
        await store.insert(Category.PROFILE, UserProfile(fullName="Bob"))

        profile = await store.query_profile()

        assert (profile.id, profile.fullName) == (first, "Ann")

    async def test_profiles_are_not_dated(self, store):
        with pytest.raises(ValueError):
            await store.query_by_date(Category.PROFILE, "2024-01-01")


class TestConnection:

    async def test_closed_connection_raises_store_error(self, tmp_path):
        repo = SQLiteFluidIntakeRepository(AsyncSQLiteConnection(str(tmp_path / "x.db")))
        with pytest.raises(StoreIOError):
            await repo.get_all()

    async def test_sql_failure_is_wrapped(self, factory):
        with pytest.raises(StoreIOError):
            async with factory.connection.acquire() as conn:
                await conn.execute("SELECT * FROM no_such_table")

    async def test_failed_write_keeps_committed_rows(self, factory, store):
        entry_id = await store.insert(Category.FLUID_INTAKE, _fluid())

        with pytest.raises(StoreIOError):
            async with factory.connection.acquire() as conn:
                await conn.execute("INSERT INTO no_such_table VALUES (1)")

        assert [e.id for e in await store.query_all(Category.FLUID_INTAKE)] == [entry_id]

    async def test_open_is_idempotent(self, factory):
        await factory.connection.open()
        assert factory.connection.is_open
