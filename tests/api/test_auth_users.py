"""Auth (POST /jwt) and user profile endpoint tests."""

from datetime import timedelta

from httpx import AsyncClient

from assetverse.infrastructure.security.jwt import create_access_token


async def test_signup_hr_starts_on_base_package(client: AsyncClient) -> None:
    response = await client.post(
        "/users",
        json={"email": "Boss@Acme.com", "name": "Boss", "role": "hr", "companyName": "Acme"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "boss@acme.com"
    assert data["packageLimit"] == 5
    assert data["currentEmployees"] == 0
    assert data["subscription"] == "basic"
    assert data["companyName"] == "Acme"


async def test_signup_employee_has_no_company_fields(client: AsyncClient) -> None:
    response = await client.post(
        "/users", json={"email": "e@mail.com", "name": "E", "role": "employee"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "employee"
    assert data["packageLimit"] is None
    assert data["companyName"] is None


async def test_signup_hr_without_company_is_400(client: AsyncClient) -> None:
    response = await client.post("/users", json={"email": "h@mail.com", "name": "H", "role": "hr"})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["statusCode"] == 400
    assert body["details"]


async def test_signup_invalid_role_is_400(client: AsyncClient) -> None:
    response = await client.post(
        "/users", json={"email": "h@mail.com", "name": "H", "role": "admin"}
    )
    assert response.status_code == 400


async def test_signup_duplicate_email_is_409(client: AsyncClient) -> None:
    body = {"email": "dup@mail.com", "name": "D", "role": "employee"}
    assert (await client.post("/users", json=body)).status_code == 201
    response = await client.post("/users", json={**body, "email": "DUP@mail.com"})
    assert response.status_code == 409
    assert response.json()["code"] == "USER_EXISTS"


async def test_jwt_unknown_email_is_401(client: AsyncClient) -> None:
    response = await client.post("/jwt", json={"email": "ghost@mail.com"})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


async def test_protected_endpoint_without_token_is_401(client: AsyncClient) -> None:
    response = await client.get("/assets")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


async def test_protected_endpoint_with_garbage_token_is_401(client: AsyncClient) -> None:
    response = await client.get("/assets", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


async def test_expired_token_is_401(client: AsyncClient, register) -> None:
    await register("late@mail.com")
    token = create_access_token(
        {"sub": "late@mail.com", "email": "late@mail.com", "role": "employee"},
        expires_delta=timedelta(seconds=-5),
    )
    response = await client.get("/assets", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_get_own_profile(client: AsyncClient, employee_headers) -> None:
    response = await client.get("/users/emp@acme.com", headers=employee_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Eli Moss"


async def test_get_other_profile_is_403(client: AsyncClient, employee_headers, hr_headers) -> None:
    response = await client.get("/users/hr@acme.com", headers=employee_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


async def test_update_profile_ignores_identity_fields(client: AsyncClient, hr_headers) -> None:
    response = await client.put(
        "/users/hr@acme.com",
        json={
            "name": "Hana R.",
            "companyLogo": "https://img.test/logo.png",
            "role": "employee",
            "packageLimit": 999,
        },
        headers=hr_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Hana R."
    assert data["companyLogo"] == "https://img.test/logo.png"
    assert data["role"] == "hr"
    assert data["packageLimit"] == 5


async def test_update_other_profile_is_403(client: AsyncClient, employee_headers, hr_headers) -> None:
    response = await client.put(
        "/users/hr@acme.com", json={"name": "Hacked"}, headers=employee_headers
    )
    assert response.status_code == 403


async def test_signup_duplicate_company_is_409(client: AsyncClient, hr_headers) -> None:
    response = await client.post(
        "/users",
        json={"email": "boss@mail.com", "name": "Boss", "role": "hr", "companyName": " acme corp "},
    )
    assert response.status_code == 409
    assert response.json()["code"] == "COMPANY_EXISTS"
    assert (await client.post("/jwt", json={"email": "boss@mail.com"})).status_code == 401


async def test_hr_lists_users_with_filters(
    client: AsyncClient, hr_headers, employee_headers, register
) -> None:
    await register("ola@mail.com", name="Ola Park")

    everyone = (await client.get("/users", headers=hr_headers)).json()
    assert {u["email"] for u in everyone} == {"hr@acme.com", "emp@acme.com", "ola@mail.com"}

    employees = (await client.get("/users", params={"role": "employee"}, headers=hr_headers)).json()
    assert {u["email"] for u in employees} == {"emp@acme.com", "ola@mail.com"}

    one = (await client.get("/users", params={"email": "OLA@mail.com"}, headers=hr_headers)).json()
    assert [u["name"] for u in one] == ["Ola Park"]

    found = (await client.get("/users", params={"search": "eli"}, headers=hr_headers)).json()
    assert [u["email"] for u in found] == ["emp@acme.com"]


async def test_employee_cannot_list_users(client: AsyncClient, employee_headers) -> None:
    response = await client.get("/users", headers=employee_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
