"""Backend API calls used by the console shell."""

from typing import Any

from waypost.errors import ApiError
from waypost.http.client import ApiClient


async def login(client: ApiClient, username: str, password: str) -> str:
    """Authenticate and return the issued bearer token."""
    data = await client.post("/auth/login", {"username": username, "password": password})
    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        raise ApiError("Login response carried no token")
    return str(token)


async def get_profile(client: ApiClient) -> Any:
    return await client.get("/user/profile")


async def get_user_roles(client: ApiClient, user_id: int | str) -> Any:
    return await client.get("/user/roles", params={"id": user_id})


async def get_user_menus(client: ApiClient, user_id: int | str | None = None) -> Any:
    if user_id is not None:
        return await client.get("/user/menus", params={"userId": user_id})
    return await client.get("/user/menus")


async def get_all_perms(client: ApiClient) -> list[str]:
    """Every permission token the backend defines."""
    return list(await client.get("/perms/all") or [])


async def get_my_perms(client: ApiClient) -> list[str]:
    """Permission tokens granted to the current user."""
    return list(await client.get("/perms/me") or [])
