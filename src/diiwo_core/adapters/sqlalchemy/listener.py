# src/diiwo_core/adapters/sqlalchemy/listener.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""``before_flush`` audit hook.

Purpose:
    Run the :class:`~diiwo_core.application.audit.AuditPolicy` over every
    flush of one session. The listener is bound to a single ``Session`` (or
    the sync session behind an ``AsyncSession``) and to the actor passed at
    installation time; it never looks the actor up from global state.

Usage:
    listener = install_audit_listener(session, policy, actor)
    ...
    listener.remove()

Layer:
    adapters/sqlalchemy
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, UOWTransaction

from diiwo_core.application.audit import ActorLike, AuditPolicy, AuditReport
from diiwo_core.config.settings import get_settings

from .change_set import SessionChangeSet

__all__ = ["AuditListener", "install_audit_listener"]

logger = logging.getLogger(__name__)


class AuditListener:
    """Callable registered as a session's ``before_flush`` hook."""

    def __init__(self, session: Session, policy: AuditPolicy, actor: ActorLike = None) -> None:
        self._session = session
        self._policy = policy
        self._actor = actor
        self._installed = False
        self.last_report: AuditReport | None = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def policy(self) -> AuditPolicy:
        return self._policy

    @property
    def actor(self) -> ActorLike:
        return self._actor

    @property
    def installed(self) -> bool:
        return self._installed

    def __call__(
        self,
        session: Session,
        flush_context: UOWTransaction,
        instances: Any,
    ) -> None:
        self.last_report = self._policy.apply(SessionChangeSet(session), self._actor)

    def install(self) -> AuditListener:
        if not self._installed:
            event.listen(self._session, "before_flush", self)
            self._installed = True
        return self

    def remove(self) -> None:
        """Unregister the hook (no-op if already removed)."""
        if self._installed:
            event.remove(self._session, "before_flush", self)
            self._installed = False


def install_audit_listener(
    session: Session | AsyncSession,
    policy: AuditPolicy | None = None,
    actor: ActorLike = None,
) -> AuditListener:
    """Register the audit hook on ``session``.

    Args:
        session: Target ``Session`` or ``AsyncSession``.
        policy: Audit policy; built from :func:`get_settings` when omitted.
        actor: Current actor (provider or bare id) for every flush of this
            session; None for anonymous writes.

    Returns:
        AuditListener: Handle whose :meth:`AuditListener.remove` unregisters the hook.

    Raises:
        TypeError: If ``session`` is not a SQLAlchemy session.
    """
    if isinstance(session, AsyncSession):
        target = session.sync_session
    elif isinstance(session, Session):
        target = session
    else:
        raise TypeError(
            f"install_audit_listener() expects Session or AsyncSession, got {type(session).__name__}"
        )

    if policy is None:
        policy = AuditPolicy.from_settings(get_settings())

    listener = AuditListener(target, policy, actor).install()
    logger.debug(
        "Audit listener installed",
        extra={"extra": {"policy_enabled": policy.enabled, "soft_delete": policy.soft_delete}},
    )
    return listener
