"""Tests for AdminAuthGuard."""

import pytest

from shared.storage import MemoryStorage
from modules.admin.context import ADMIN_SESSION_KEY, AdminSessionContext
from modules.admin.guard import AdminAuthGuard
from modules.admin.models import GuardState, SessionValidation
from modules.routing.models import Paths
from tests.conftest import make_admin_gateway


class TestAdminAuthGuard:
    @pytest.mark.asyncio
    async def test_waits_while_loading(self):
        context = AdminSessionContext(make_admin_gateway(), MemoryStorage())
        guard = AdminAuthGuard(context)

        assert await guard.enter() is None
        assert guard.state == GuardState.VALIDATING

    @pytest.mark.asyncio
    async def test_no_admin_redirects(self):
        async with AdminSessionContext(make_admin_gateway(), MemoryStorage()) as context:
            guard = AdminAuthGuard(context)
            decision = await guard.enter()

        assert decision.path == Paths.ADMIN_AUTH
        assert guard.state == GuardState.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_revalidates_on_every_later_entry(self):
        gateway = make_admin_gateway()
        storage = MemoryStorage({ADMIN_SESSION_KEY: "tok"})

        async with AdminSessionContext(gateway, storage) as context:
            guard = AdminAuthGuard(context)
            first = await guard.enter()
            second = await guard.enter()

        assert first.is_redirect is False
        assert second.is_redirect is False
        assert guard.state == GuardState.AUTHORIZED
        # mount, then the second entry
        assert gateway.validate_session.call_count == 2

    @pytest.mark.asyncio
    async def test_first_entry_reuses_mount_validation(self):
        gateway = make_admin_gateway()
        storage = MemoryStorage({ADMIN_SESSION_KEY: "tok"})

        async with AdminSessionContext(gateway, storage) as context:
            decision = await AdminAuthGuard(context).enter()

        assert decision.is_redirect is False
        gateway.validate_session.assert_called_once_with("tok")

    @pytest.mark.asyncio
    async def test_revoked_session_redirects(self):
        gateway = make_admin_gateway()
        storage = MemoryStorage({ADMIN_SESSION_KEY: "tok"})

        async with AdminSessionContext(gateway, storage) as context:
            await AdminAuthGuard(context).enter()
            gateway.validate_session.return_value = SessionValidation(session_valid=False)
            decision = await AdminAuthGuard(context).enter()
            assert context.admin is None

        assert decision.path == Paths.ADMIN_AUTH
        assert storage.items() == {}

    @pytest.mark.asyncio
    async def test_network_error_fails_closed(self):
        gateway = make_admin_gateway()
        storage = MemoryStorage({ADMIN_SESSION_KEY: "tok"})

        async with AdminSessionContext(gateway, storage) as context:
            await AdminAuthGuard(context).enter()
            gateway.validate_session.side_effect = ConnectionError("offline")
            guard = AdminAuthGuard(context)
            decision = await guard.enter()
            assert context.admin is None

        assert decision.path == Paths.ADMIN_AUTH
        assert guard.state == GuardState.UNAUTHORIZED
        assert storage.get(ADMIN_SESSION_KEY) is None
