"""领域模型与时间戳格式测试"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from tasktrack.core.models import (
    Account,
    TaskCreate,
    TaskStatus,
    TaskUpdate,
    is_completed,
)
from tasktrack.core.store.sqlite_init import format_ts


class TestTaskStatus:
    def test_values(self):
        assert [s.value for s in TaskStatus] == ["pending", "in_progress", "done"]

    @pytest.mark.parametrize(
        "status,expected",
        [
            (TaskStatus.PENDING, False),
            (TaskStatus.IN_PROGRESS, False),
            (TaskStatus.DONE, True),
        ],
    )
    def test_is_completed(self, status: TaskStatus, expected: bool):
        assert is_completed(status) is expected

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            TaskStatus("archived")


class TestTaskInputs:
    def test_create_requires_title(self):
        """标题为空或缺失时校验失败"""
        with pytest.raises(ValidationError):
            TaskCreate(title="")
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"description": "x"})

    def test_create_rejects_unknown_fields(self):
        """不接受 owner_id 等额外字段"""
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"title": "t", "owner_id": "someone"})

    def test_create_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="t", status="archived")

    def test_update_tracks_explicit_fields(self):
        """仅显式提供的字段出现在 exclude_unset 结果中"""
        update = TaskUpdate.model_validate({"description": None})
        assert update.model_dump(exclude_unset=True) == {"description": None}

    def test_update_rejects_owner_change(self):
        with pytest.raises(ValidationError):
            TaskUpdate.model_validate({"owner_id": "someone"})


class TestAccountView:
    def test_view_hides_password_hash(self):
        """对外视图不含口令摘要"""
        account = Account(
            account_id="01ACCOUNT",
            name="Ana",
            email="ana@example.com",
            password_hash="$2b$04$digest",
            created_at=datetime.now(UTC),
        )
        view = account.to_view().model_dump()
        assert view == {"id": "01ACCOUNT", "name": "Ana", "email": "ana@example.com"}


class TestFormatTs:
    def test_none(self):
        assert format_ts(None) is None

    def test_converts_to_utc(self):
        """带时区的时间转换为 UTC"""
        value = datetime(2024, 5, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert format_ts(value) == "2024-05-01T12:00:00.000000+00:00"

    def test_naive_treated_as_utc(self):
        assert format_ts(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00.000000+00:00"

    def test_lexical_order_matches_time_order(self):
        """固定宽度格式下字符串顺序与时间顺序一致"""
        earlier = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
        later = earlier + timedelta(microseconds=1)
        assert format_ts(earlier) < format_ts(later)
