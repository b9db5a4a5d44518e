"""
Client-held key/value storage.

The browser keeps two storage scopes:
- session scope: discarded when the browser closes (admin session token)
- local scope: survives restarts (user tokens, login-attempt counter)

Over HTTP both scopes are cookies. Session-scope cookies carry no
Max-Age; local-scope cookies carry a long one. Writes are buffered and
applied onto whichever response the route finally returns.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, runtime_checkable

from fastapi import Request, Response

from .config import Settings


@runtime_checkable
class ClientStorage(Protocol):
    """Minimal string key/value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStorage:
    """In-process storage, used by tests and scripts."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def items(self) -> dict[str, str]:
        return dict(self._items)


class CookieStorage:
    """
    Storage backed by request cookies.

    Reads see the request's cookies overlaid with writes made during the
    request. Writes reach the browser only through apply().
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        max_age: Optional[int] = None,
        secure: bool = False,
    ) -> None:
        self._cookies = dict(cookies)
        self._max_age = max_age
        self._secure = secure
        # None marks a pending deletion
        self._pending: dict[str, Optional[str]] = {}

    def get(self, key: str) -> Optional[str]:
        if key in self._pending:
            return self._pending[key]
        return self._cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self._pending[key] = value

    def remove(self, key: str) -> None:
        self._pending[key] = None

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Response) -> None:
        """Write pending changes onto the response as Set-Cookie headers."""
        for key, value in self._pending.items():
            if value is None:
                response.delete_cookie(key, path="/", secure=self._secure, httponly=True, samesite="lax")
            else:
                response.set_cookie(
                    key,
                    value,
                    max_age=self._max_age,
                    path="/",
                    secure=self._secure,
                    httponly=True,
                    samesite="lax",
                )


@dataclass
class BrowserStorage:
    """The two storage scopes of one browser."""

    session: ClientStorage
    local: ClientStorage

    @classmethod
    def from_request(cls, request: Request, settings: Settings) -> "BrowserStorage":
        return cls(
            session=CookieStorage(request.cookies, max_age=None, secure=settings.cookie_secure),
            local=CookieStorage(
                request.cookies,
                max_age=settings.local_storage_max_age,
                secure=settings.cookie_secure,
            ),
        )

    @classmethod
    def in_memory(cls) -> "BrowserStorage":
        return cls(session=MemoryStorage(), local=MemoryStorage())

    def commit(self, response: Response) -> Response:
        """Apply buffered cookie writes from both scopes and return the response."""
        for scope in (self.session, self.local):
            if isinstance(scope, CookieStorage):
                scope.apply(response)
        return response
