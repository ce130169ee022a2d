"""Purchases racing an unpublish of the same course."""
import asyncio
from datetime import datetime

import pytest
from httpx import AsyncClient

from conftest import buy, create_course, publish


@pytest.mark.asyncio
@pytest.mark.slow
async def test_purchases_racing_unpublish(client: AsyncClient):
    course = await create_course(client, price=25)
    cid = course["id"]
    await publish(client, cid)

    async def unpublish():
        return await client.patch(f"/api/courses/{cid}", json={"published": False})

    attempts = [buy(client, cid, f"Buyer {i}", f"b{i}@x.com") for i in range(10)]
    results = await asyncio.gather(*attempts[:5], unpublish(), *attempts[5:])
    toggle = results[5]
    purchases = results[:5] + results[6:]

    assert toggle.status_code == 200, toggle.text
    unpublished_at = datetime.fromisoformat(toggle.json()["updated_at"])

    succeeded = []
    for r in purchases:
        if r.status_code == 201:
            assert r.json()["status"] == "completed"
            succeeded.append(r.json())
        else:
            assert r.status_code == 409, r.text
            assert r.json()["kind"] == "IneligiblePurchaseError"

    # every recorded order committed before the course became a draft
    for order in succeeded:
        assert datetime.fromisoformat(order["created_at"]) <= unpublished_at

    ledger = (await client.get("/api/orders", params={"course_id": cid})).json()
    assert sorted(o["id"] for o in ledger) == sorted(o["id"] for o in succeeded)
    summary = (await client.get("/api/admin/summary")).json()
    assert summary["total_sales"] == len(succeeded)
    assert summary["revenue"] == 25 * len(succeeded)

    late = await buy(client, cid)
    assert late.status_code == 409


@pytest.mark.asyncio
@pytest.mark.slow
async def test_concurrent_purchases_all_recorded(client: AsyncClient):
    course = await create_course(client, price=10)
    await publish(client, course["id"])

    results = await asyncio.gather(
        *[buy(client, course["id"], f"B{i}", f"b{i}@x.com") for i in range(8)]
    )
    assert all(r.status_code == 201 for r in results)
    assert len({r.json()["id"] for r in results}) == 8
    summary = (await client.get("/api/admin/summary")).json()
    assert summary["total_sales"] == 8
    assert summary["revenue"] == 80
