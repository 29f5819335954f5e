"""Unit tests for activity_log_service module."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from boothdesk.core.config import Constants
from boothdesk.core.errors import StoreReadError, StoreWriteError
from boothdesk.services import activity_log_service
from tests.conftest import BASE_TIME


def at(minute: int):
    return BASE_TIME + timedelta(minutes=minute)


@pytest.fixture
def small_pages(monkeypatch):
    """Shrink page and batch sizes so a handful of records spans several queries."""
    monkeypatch.setattr(Constants, "ACTIVITY_PAGE_SIZE", 2)
    monkeypatch.setattr(Constants, "STAFF_ID_BATCH_SIZE", 1)


@pytest.mark.unit
class TestFetchActivities:
    """Tests for fetch_activities function."""

    async def test_newest_first(self, log_activity):
        """Test the log comes back in descending timestamp order."""
        await log_activity("s1", "primeira", at(1))
        await log_activity("s1", "terceira", at(3))
        await log_activity("s1", "segunda", at(2))

        activities = await activity_log_service.fetch_activities(staff_id="s1")

        assert [a.description for a in activities] == ["terceira", "segunda", "primeira"]
        assert activities[0].timestamp == at(3)

    async def test_only_requested_staff(self, log_activity):
        """Test entries of other staff members are filtered out."""
        await log_activity("s1", "minha", at(1))
        await log_activity("s2", "de outra pessoa", at(2))

        activities = await activity_log_service.fetch_activities(staff_id="s1")

        assert [a.staff_id for a in activities] == ["s1"]

    async def test_walks_every_page(self, log_activity, small_pages):
        """Test logs longer than one page are fetched completely."""
        for minute in range(5):
            await log_activity("s1", f"entrada {minute}", at(minute))

        activities = await activity_log_service.fetch_activities(staff_id="s1")

        assert [a.description for a in activities] == [f"entrada {m}" for m in (4, 3, 2, 1, 0)]

    async def test_store_failure_raises_read_error(self, patched_db):
        """Test store failures surface as StoreReadError."""
        patched_db.fail_reads_from.add("staff_activities")

        with pytest.raises(StoreReadError, match="Failed to fetch activities"):
            await activity_log_service.fetch_activities(staff_id="s1")

    async def test_malformed_record_raises_read_error(self, patched_db):
        """Test records missing required fields surface as StoreReadError."""
        await patched_db.create_record("staff_activities", {"staff_id": "s1", "description": "sem data"})

        with pytest.raises(StoreReadError, match="Malformed activity record"):
            await activity_log_service.fetch_activities(staff_id="s1")


@pytest.mark.unit
class TestFetchActivitiesForStaff:
    """Tests for fetch_activities_for_staff function."""

    async def test_merges_batches_newest_first(self, log_activity, small_pages):
        """Test results from separate batches are merged in descending order."""
        await log_activity("s1", "s1 antiga", at(1))
        await log_activity("s2", "s2 meio", at(2))
        await log_activity("s1", "s1 nova", at(3))
        await log_activity("s3", "s3 fora", at(4))

        activities = await activity_log_service.fetch_activities_for_staff(staff_ids=["s1", "s2"])

        assert [a.description for a in activities] == ["s1 nova", "s2 meio", "s1 antiga"]

    async def test_duplicate_ids_fetched_once(self, log_activity):
        """Test repeated staff IDs do not duplicate entries."""
        await log_activity("s1", "unica", at(1))

        activities = await activity_log_service.fetch_activities_for_staff(staff_ids=["s1", "s1"])

        assert len(activities) == 1

    async def test_no_staff(self, patched_db):
        """Test an empty roster needs no query."""
        patched_db.fail_reads_from.add("staff_activities")

        assert await activity_log_service.fetch_activities_for_staff(staff_ids=[]) == []

    async def test_store_failure_raises_read_error(self, patched_db):
        """Test store failures surface as StoreReadError."""
        patched_db.fail_reads_from.add("staff_activities")

        with pytest.raises(StoreReadError):
            await activity_log_service.fetch_activities_for_staff(staff_ids=["s1"])


@pytest.mark.unit
class TestAppendActivity:
    """Tests for append_activity function."""

    async def test_stores_entry(self, patched_db):
        """Test the entry is stored with an ISO timestamp and returned with its ID."""
        activity = await activity_log_service.append_activity(staff_id="s1", description="nota", timestamp=at(7))

        records = patched_db.records("staff_activities")
        assert records == [{"id": activity.id, "staff_id": "s1", "description": "nota", "timestamp": at(7).isoformat()}]
        assert activity.timestamp == at(7)

    async def test_defaults_to_now(self, patched_db):
        """Test entries without timestamp get a timezone-aware one."""
        activity = await activity_log_service.append_activity(staff_id="s1", description="nota")

        assert activity.timestamp.tzinfo is not None
        assert activity.timestamp > at(0)

    async def test_store_failure_raises_write_error(self, patched_db):
        """Test store failures surface as StoreWriteError."""
        patched_db.fail_writes_to.add("staff_activities")

        with pytest.raises(StoreWriteError, match="staff s1"):
            await activity_log_service.append_activity(staff_id="s1", description="nota")


@pytest.mark.unit
class TestGetStaffActivity:
    """Tests for get_staff_activity function."""

    async def test_returns_raw_log(self, log_activity):
        """Test every entry is returned, including task entries."""
        await log_activity("s1", "Tarefa atribuída: Realizar 'X' na empresa 'Y'", at(1))
        await log_activity("s1", "Apenas uma nota qualquer", at(2))

        activities = await activity_log_service.get_staff_activity(staff_id="s1")

        assert [a.description for a in activities] == [
            "Apenas uma nota qualquer",
            "Tarefa atribuída: Realizar 'X' na empresa 'Y'",
        ]

    async def test_read_failure_gives_empty_log(self, patched_db):
        """Test a store outage is reported as an empty log."""
        patched_db.fail_reads_from.add("staff_activities")

        assert await activity_log_service.get_staff_activity(staff_id="s1") == []


@pytest.mark.unit
class TestTimestamps:
    """Tests for timestamp handling on write and read."""

    async def test_offset_timestamp_stored_as_utc(self, patched_db):
        """Test timestamps in other offsets are converted to UTC before storage."""
        sao_paulo = timezone(timedelta(hours=-3))

        activity = await activity_log_service.append_activity(
            staff_id="s1", description="nota", timestamp=datetime(2024, 9, 12, 10, 0, tzinfo=sao_paulo)
        )

        assert patched_db.records("staff_activities")[0]["timestamp"] == "2024-09-12T13:00:00+00:00"
        assert activity.timestamp == datetime(2024, 9, 12, 13, 0, tzinfo=UTC)

    async def test_naive_timestamp_rejected(self, patched_db):
        """Test naive timestamps are refused and nothing is written."""
        with pytest.raises(ValueError, match="timezone-aware"):
            await activity_log_service.append_activity(
                staff_id="s1", description="nota", timestamp=datetime(2024, 9, 12, 11, 0)
            )

        assert patched_db.records("staff_activities") == []

    async def test_mixed_offsets_read_back_newest_first(self, patched_db):
        """Test stored entries with different offsets come back in chronological order."""
        await patched_db.create_record(
            "staff_activities", {"staff_id": "s1", "description": "12h UTC", "timestamp": "2024-09-12T12:00:00+00:00"}
        )
        await patched_db.create_record(
            "staff_activities", {"staff_id": "s1", "description": "13h UTC", "timestamp": "2024-09-12T10:00:00-03:00"}
        )

        activities = await activity_log_service.fetch_activities(staff_id="s1")

        assert [a.description for a in activities] == ["13h UTC", "12h UTC"]
        assert all(a.timestamp.tzinfo == UTC for a in activities)

    async def test_legacy_naive_entries_read_as_utc(self, patched_db):
        """Test stored entries without offset are read as UTC and sort with the rest."""
        await patched_db.create_record(
            "staff_activities", {"staff_id": "s1", "description": "11h", "timestamp": "2024-09-12T11:00:00"}
        )
        await patched_db.create_record(
            "staff_activities", {"staff_id": "s1", "description": "12h", "timestamp": "2024-09-12T12:00:00+00:00"}
        )

        activities = await activity_log_service.fetch_activities(staff_id="s1")

        assert [a.description for a in activities] == ["12h", "11h"]
        assert activities[1].timestamp == datetime(2024, 9, 12, 11, 0, tzinfo=UTC)
