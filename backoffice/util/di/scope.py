"""Dishka scopes for the backoffice container."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Two lifetimes: the process and a single dashboard action.

    - APP: RBAC table, evaluator, config, repositories, sessions, HTTP client
    - UOW: one user action; carries the caller's ``SessionToken`` and
      resolves its ``Identity``, services and handlers
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
