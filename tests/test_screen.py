import asyncio

from client.api_client import ApiError
from client.screen import Notification, Screen
from services.errors import AuthorizationError


async def test_success_returns_result_and_notifies():
    screen = Screen("certificates")

    async def action():
        assert screen.loading
        return ["cert"]

    result = await screen.run(action, "Failed to fetch certificates", success_message="Loaded")

    assert result == ["cert"]
    assert not screen.loading
    assert screen.notifications == [Notification("success", "Loaded")]


async def test_api_error_becomes_error_notification():
    screen = Screen()

    async def action():
        raise ApiError("Incorrect email or password", 401)

    assert await screen.run(action, "Login failed") is None
    assert not screen.loading
    assert screen.notifications == [Notification("error", "Incorrect email or password")]


async def test_blank_message_falls_back():
    screen = Screen()

    async def action():
        raise AuthorizationError("")

    await screen.run(action, "Failed to delete certificate")
    assert screen.notifications == [Notification("error", "Failed to delete certificate")]


async def test_result_after_unmount_is_dropped():
    screen = Screen()
    release = asyncio.Event()

    async def action():
        await release.wait()
        return "late"

    task = asyncio.create_task(screen.run(action, "Failed", success_message="Saved"))
    await asyncio.sleep(0)
    screen.unmount()
    release.set()

    assert await task is None
    assert screen.notifications == []
    assert not screen.loading


async def test_error_after_unmount_is_dropped():
    screen = Screen()

    async def action():
        screen.unmount()
        raise ApiError("gone")

    assert await screen.run(action, "Failed") is None
    assert screen.notifications == []
