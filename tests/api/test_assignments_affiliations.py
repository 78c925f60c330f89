"""Direct assignment and employee removal tests."""

from httpx import AsyncClient


async def _affiliate(client: AsyncClient, hr_headers, employee_headers, asset_id: str) -> dict:
    req = (
        await client.post("/requests", json={"assetId": asset_id}, headers=employee_headers)
    ).json()
    resp = await client.patch(
        f"/requests/{req['id']}", json={"status": "approved"}, headers=hr_headers
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


async def test_assign_requires_active_affiliation(
    client: AsyncClient, hr_headers, employee_headers, create_asset
) -> None:
    asset = await create_asset(hr_headers)
    response = await client.post(
        "/assign-asset",
        json={"assetId": asset["id"], "employeeEmail": "emp@acme.com"},
        headers=hr_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "NOT_AFFILIATED"


async def test_assign_directly_to_affiliated_employee(
    client: AsyncClient, hr_headers, employee_headers, create_asset
) -> None:
    laptop = await create_asset(hr_headers, name="Laptop")
    chair = await create_asset(hr_headers, name="Chair", quantity=2, product_type="Non-returnable")
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])

    response = await client.post(
        "/assign-asset",
        json={"assetId": chair["id"], "employeeEmail": "EMP@acme.com"},
        headers=hr_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["employeeEmail"] == "emp@acme.com"
    assert data["employeeName"] == "Eli Moss"
    assert data["requestId"] is None

    chair_now = (await client.get(f"/assets/{chair['id']}", headers=hr_headers)).json()
    assert chair_now["availableQuantity"] == 1

    again = await client.post(
        "/assign-asset",
        json={"assetId": chair["id"], "employeeEmail": "emp@acme.com"},
        headers=hr_headers,
    )
    assert again.status_code == 409
    assert again.json()["code"] == "ALREADY_ASSIGNED"

    company = (await client.get("/company-assignments", headers=hr_headers)).json()
    assert {a["productName"] for a in company} == {"Laptop", "Chair"}
    filtered = (
        await client.get(
            "/assigned-assets", params={"productType": "Non-returnable"}, headers=employee_headers
        )
    ).json()
    assert [a["productName"] for a in filtered] == ["Chair"]


async def test_assign_out_of_stock(
    client: AsyncClient, hr_headers, employee_headers, register, create_asset
) -> None:
    laptop = await create_asset(hr_headers, name="Laptop", quantity=2)
    other = await register("other@acme.com")
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])
    await _affiliate(client, hr_headers, other, laptop["id"])
    badge = await create_asset(hr_headers, name="Badge", quantity=1)

    first = await client.post(
        "/assign-asset",
        json={"assetId": badge["id"], "employeeEmail": "emp@acme.com"},
        headers=hr_headers,
    )
    assert first.status_code == 201
    second = await client.post(
        "/assign-asset",
        json={"assetId": badge["id"], "employeeEmail": "other@acme.com"},
        headers=hr_headers,
    )
    assert second.status_code == 400
    assert second.json()["code"] == "OUT_OF_STOCK"


async def test_employee_cannot_assign_or_list_company(
    client: AsyncClient, employee_headers
) -> None:
    response = await client.post(
        "/assign-asset",
        json={"assetId": "x", "employeeEmail": "emp@acme.com"},
        headers=employee_headers,
    )
    assert response.status_code == 403
    assert (await client.get("/company-assignments", headers=employee_headers)).status_code == 403


async def test_remove_employee_returns_everything_once(
    client: AsyncClient, hr_headers, employee_headers, create_asset
) -> None:
    laptop = await create_asset(hr_headers, name="Laptop", quantity=2)
    phone = await create_asset(hr_headers, name="Phone", quantity=2)
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])
    await _affiliate(client, hr_headers, employee_headers, phone["id"])
    hr_profile = (await client.get("/users/hr@acme.com", headers=hr_headers)).json()
    assert hr_profile["currentEmployees"] == 1

    response = await client.patch(
        "/affiliations",
        json={"employeeEmail": "emp@acme.com", "status": "inactive"},
        headers=hr_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "inactive"
    assert response.json()["removedDate"] is not None

    hr_profile = (await client.get("/users/hr@acme.com", headers=hr_headers)).json()
    assert hr_profile["currentEmployees"] == 0
    for asset in (laptop, phone):
        now = (await client.get(f"/assets/{asset['id']}", headers=hr_headers)).json()
        assert now["availableQuantity"] == 2

    held = (
        await client.get("/assigned-assets", params={"status": "assigned"}, headers=employee_headers)
    ).json()
    assert held == []
    assert (await client.get("/affiliations", headers=hr_headers)).json() == []
    inactive = (
        await client.get("/affiliations", params={"status": "inactive"}, headers=hr_headers)
    ).json()
    assert [a["employeeEmail"] for a in inactive] == ["emp@acme.com"]

    twice = await client.patch(
        "/affiliations",
        json={"employeeEmail": "emp@acme.com", "status": "inactive"},
        headers=hr_headers,
    )
    assert twice.status_code == 400
    assert twice.json()["code"] == "INVALID_STATE"


async def test_reapproval_reactivates_affiliation(
    client: AsyncClient, hr_headers, employee_headers, create_asset
) -> None:
    laptop = await create_asset(hr_headers, name="Laptop")
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])
    await client.patch(
        "/affiliations",
        json={"employeeEmail": "emp@acme.com", "status": "inactive"},
        headers=hr_headers,
    )
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])

    active = (await client.get("/affiliations", headers=employee_headers)).json()
    assert len(active) == 1
    assert active[0]["status"] == "active"
    assert active[0]["removedDate"] is None
    hr_profile = (await client.get("/users/hr@acme.com", headers=hr_headers)).json()
    assert hr_profile["currentEmployees"] == 1


async def test_affiliated_employee_sees_company_assets(
    client: AsyncClient, hr_headers, employee_headers, create_asset
) -> None:
    laptop = await create_asset(hr_headers, name="Laptop")
    await create_asset(hr_headers, name="Desk")
    await _affiliate(client, hr_headers, employee_headers, laptop["id"])
    listed = (await client.get("/assets", headers=employee_headers)).json()
    assert {a["productName"] for a in listed} == {"Laptop", "Desk"}


async def test_remove_unknown_employee_is_404(client: AsyncClient, hr_headers) -> None:
    response = await client.patch(
        "/affiliations",
        json={"employeeEmail": "ghost@acme.com", "status": "inactive"},
        headers=hr_headers,
    )
    assert response.status_code == 404


async def test_employee_cannot_remove(client: AsyncClient, employee_headers) -> None:
    response = await client.patch(
        "/affiliations",
        json={"employeeEmail": "emp@acme.com", "status": "inactive"},
        headers=employee_headers,
    )
    assert response.status_code == 403


async def test_affiliation_patch_only_accepts_inactive(client: AsyncClient, hr_headers) -> None:
    response = await client.patch(
        "/affiliations",
        json={"employeeEmail": "emp@acme.com", "status": "active"},
        headers=hr_headers,
    )
    assert response.status_code == 400
