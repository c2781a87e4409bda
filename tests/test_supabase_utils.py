import asyncio
import time
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from conftest import make_settings
from copyworx.exceptions import DatabaseNotConfigured
from copyworx.utils.supabase_utils import SupabaseManager


@pytest.fixture
def query():
    builder = MagicMock()
    for method in ("select", "insert", "update", "upsert", "delete", "eq", "order", "limit"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=[{"id": "a"}])
    return builder


@pytest.fixture
def manager(query):
    client = MagicMock()
    client.table.return_value = query
    return SupabaseManager(make_settings(max_retries=2), client=client)


def test_unconfigured_manager_raises():
    with pytest.raises(DatabaseNotConfigured):
        SupabaseManager(make_settings())


@pytest.mark.asyncio
async def test_select_applies_filters_order_and_limit(manager, query):
    rows = await manager.execute_with_retry(
        "select",
        "personas",
        filters={"project_id": "p1", "user_id": "u1"},
        order=("created_at", False),
        limit=5,
    )

    assert rows == [{"id": "a"}]
    query.select.assert_called_once_with("*")
    assert [c.args for c in query.eq.call_args_list] == [("project_id", "p1"), ("user_id", "u1")]
    query.order.assert_called_once_with("created_at", desc=False)
    query.limit.assert_called_once_with(5)


@pytest.mark.asyncio
async def test_api_errors_are_retried(manager, query):
    query.execute.side_effect = [
        APIError({"message": "connection reset", "code": "08006"}),
        MagicMock(data=None),
    ]

    rows = await manager.execute_with_retry("delete", "personas", filters={"id": "a"})

    assert rows == []
    assert query.execute.call_count == 2


@pytest.mark.asyncio
async def test_api_error_raised_after_retries(manager, query):
    query.execute.side_effect = APIError({"message": "down", "code": "08006"})

    with pytest.raises(APIError):
        await manager.execute_with_retry("select", "personas")

    assert query.execute.call_count == 3


@pytest.mark.asyncio
async def test_filters_rejected_for_insert(manager):
    with pytest.raises(ValueError):
        await manager.execute_with_retry("insert", "personas", {"name": "x"}, filters={"id": "a"})


@pytest.mark.asyncio
async def test_unknown_operation_rejected(manager):
    with pytest.raises(ValueError):
        await manager.execute_with_retry("truncate", "personas")


@pytest.mark.asyncio
async def test_slow_query_does_not_block_event_loop(manager, query):
    finished = {}

    def slow_execute():
        time.sleep(0.3)
        finished["query"] = time.monotonic()
        return MagicMock(data=[{"id": "a"}])

    async def other_request():
        await asyncio.sleep(0.01)
        finished["other"] = time.monotonic()

    query.execute.side_effect = slow_execute

    rows, _ = await asyncio.gather(manager.execute_with_retry("select", "personas"), other_request())

    assert rows == [{"id": "a"}]
    assert finished["other"] < finished["query"]
