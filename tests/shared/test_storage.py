"""Tests for shared/storage.py."""

from fastapi import Response

from shared.storage import BrowserStorage, ClientStorage, CookieStorage, MemoryStorage


class TestMemoryStorage:
    def test_set_get_remove(self):
        storage = MemoryStorage()
        storage.set("key", "value")
        assert storage.get("key") == "value"
        storage.remove("key")
        assert storage.get("key") is None

    def test_remove_missing_key_is_noop(self):
        storage = MemoryStorage({"a": "1"})
        storage.remove("missing")
        assert storage.items() == {"a": "1"}

    def test_satisfies_protocol(self):
        assert isinstance(MemoryStorage(), ClientStorage)


class TestCookieStorage:
    def test_reads_request_cookies(self):
        storage = CookieStorage({"sb-access-token": "abc"})
        assert storage.get("sb-access-token") == "abc"
        assert not storage.dirty

    def test_writes_overlay_request_cookies(self):
        storage = CookieStorage({"a": "1", "b": "2"})
        storage.set("a", "changed")
        storage.remove("b")
        assert storage.get("a") == "changed"
        assert storage.get("b") is None
        assert storage.dirty

    def test_apply_sets_persistent_cookie(self):
        storage = CookieStorage({}, max_age=3600)
        storage.set("admin_login_attempts", "2")
        response = Response()

        storage.apply(response)

        header = response.headers["set-cookie"]
        assert "admin_login_attempts=2" in header
        assert "Max-Age=3600" in header
        assert "HttpOnly" in header

    def test_apply_session_cookie_has_no_max_age(self):
        storage = CookieStorage({})
        storage.set("admin_session_token", "tok")
        response = Response()

        storage.apply(response)

        header = response.headers["set-cookie"]
        assert "admin_session_token=tok" in header
        assert "Max-Age" not in header

    def test_apply_deletes_removed_cookie(self):
        storage = CookieStorage({"admin_session_token": "tok"})
        storage.remove("admin_session_token")
        response = Response()

        storage.apply(response)

        header = response.headers["set-cookie"]
        assert "admin_session_token=" in header
        assert "Max-Age=0" in header


class TestBrowserStorage:
    def test_in_memory_scopes_are_separate(self):
        storage = BrowserStorage.in_memory()
        storage.session.set("k", "session")
        storage.local.set("k", "local")
        assert storage.session.get("k") == "session"
        assert storage.local.get("k") == "local"

    def test_commit_applies_both_scopes(self):
        storage = BrowserStorage(
            session=CookieStorage({}),
            local=CookieStorage({}, max_age=60),
        )
        storage.session.set("admin_session_token", "tok")
        storage.local.set("admin_login_attempts", "1")
        response = Response()

        returned = storage.commit(response)

        assert returned is response
        cookies = response.headers.getlist("set-cookie")
        assert any(c.startswith("admin_session_token=tok") for c in cookies)
        assert any(c.startswith("admin_login_attempts=1") for c in cookies)

    def test_commit_ignores_memory_scopes(self):
        storage = BrowserStorage.in_memory()
        storage.local.set("a", "1")
        response = Response()
        storage.commit(response)
        assert "set-cookie" not in response.headers
