"""Custom Dishka scopes for prodrec."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """prodrec dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, blob store, services)
    - UOW: One command or query invocation (unit of work, handlers)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
