"""Shared dependencies of the fake backend routers.

Routers get the FakeBackend they serve through the ``Backend`` annotation;
create_app() stores it on ``app.state``.
"""

from typing import Annotated

from fastapi import Depends, Request

from dashboard.testing.backend import FakeBackend


def get_backend(request: Request) -> FakeBackend:
    return request.app.state.backend  # type: ignore[no-any-return]


Backend = Annotated[FakeBackend, Depends(get_backend)]
