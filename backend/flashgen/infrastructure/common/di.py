from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from flashgen.core import container
from flashgen.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The provider is built against the request's database session; the
    override is dropped again once the object exists.
    """

    def dependency(db: DatabaseSession) -> T:
        try:
            container.db.override(db)
            return provider()
        finally:
            container.db.reset_override()

    return dependency
