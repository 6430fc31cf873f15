# src/diiwo_core/adapters/sqlalchemy/uow.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""SQLAlchemy-backed Unit of Work implementation.

Purpose:
    Concrete implementation of the application-layer UnitOfWork protocol
    using SQLAlchemy's AsyncSession. For its whole lifetime the session
    carries an audit listener bound to the actor given at construction, so
    every flush (explicit, autoflush or commit) is audited.

Layer:
    adapters/sqlalchemy
"""

from __future__ import annotations

import logging
import uuid
from contextvars import Token
from types import TracebackType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from diiwo_core.application.audit import ActorLike, AuditPolicy, AuditReport
from diiwo_core.application.uow import UnitOfWork
from diiwo_core.infrastructure.logging.logger import (
    bind_unit_of_work_id,
    reset_unit_of_work_id,
)

from .listener import AuditListener, install_audit_listener

__all__ = ["SqlAlchemyUnitOfWork"]

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy-based UnitOfWork implementation.

    Intended to be used via:

        async with SqlAlchemyUnitOfWork(session_factory=..., actor=actor) as uow:
            uow.add(entity)
            await uow.delete(other)
            await uow.commit()
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        actor: ActorLike = None,
        policy: AuditPolicy | None = None,
    ) -> None:
        """Initialize the UnitOfWork.

        Args:
            session_factory: Factory for creating new AsyncSession instances.
            actor: Current actor attributed to every write of this unit.
            policy: Audit policy; built from settings when omitted.
        """
        self._session_factory = session_factory
        self._actor = actor
        self._policy = policy
        self._session: AsyncSession | None = None
        self._listener: AuditListener | None = None
        self._log_token: Token[str | None] | None = None
        self.unit_of_work_id: str | None = None
        self._committed = False
        self._rolled_back = False

    # ------------------------------------------------------------------
    # Async context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        """Open a new AsyncSession and install the audit listener.

        Raises:
            RuntimeError: If a session is already active (nested usage).
        """
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already active; nested usage is not supported.")

        self._session = self._session_factory()
        self._listener = install_audit_listener(self._session, self._policy, self._actor)
        self.unit_of_work_id = uuid.uuid4().hex
        self._log_token = bind_unit_of_work_id(self.unit_of_work_id)
        self._committed = False
        self._rolled_back = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        """Exit the UnitOfWork context.

        Behavior:
            * If an exception occurred and no rollback has been performed yet,
              rolls back the transaction.
            * Removes the audit listener and closes the AsyncSession.

        Returns:
            Always returns None; exceptions are propagated.
        """
        try:
            if exc_type is not None and not self._rolled_back:
                await self.rollback()
        finally:
            if self._listener is not None:
                self._listener.remove()
                self._listener = None
            if self._session is not None:
                await self._session.close()
                self._session = None
            if self._log_token is not None:
                reset_unit_of_work_id(self._log_token)
                self._log_token = None
        return None

    # ------------------------------------------------------------------
    # Session access
    # ------------------------------------------------------------------

    @property
    def session(self) -> AsyncSession:
        """Active AsyncSession.

        Raises:
            RuntimeError: If accessed outside of an active UnitOfWork scope.
        """
        if self._session is None:
            raise RuntimeError(
                "session accessed outside of an active UnitOfWork scope. "
                "Use 'async with uow:' first.",
            )
        return self._session

    @property
    def last_report(self) -> AuditReport | None:
        """Audit report of the most recent flush, if any."""
        return self._listener.last_report if self._listener is not None else None

    def add(self, entity: Any) -> None:
        self.session.add(entity)

    async def delete(self, entity: Any) -> None:
        await self.session.delete(entity)

    async def flush(self) -> None:
        await self.session.flush()

    # ------------------------------------------------------------------
    # Transaction control
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        """Commit the current transaction if active.

        No-op if the UnitOfWork was rolled back. Committing again after further
        changes is allowed.

        Raises:
            RuntimeError: If called without an active session.
        """
        if self._session is None:
            raise RuntimeError("Cannot commit: UnitOfWork has no active session.")

        if self._rolled_back:
            return

        await self._session.commit()
        self._committed = True

        report = self.last_report
        if report is not None:
            logger.debug(
                "Unit of work committed",
                extra={
                    "actor_id": report.actor_id,
                    "extra": {
                        "inserted": report.inserted,
                        "updated": report.updated,
                        "soft_deleted": report.soft_deleted,
                        "hard_deleted": report.hard_deleted,
                    },
                },
            )

    async def rollback(self) -> None:
        """Roll back the current transaction if active.

        No-op if already rolled back or committed, or if no session exists.
        """
        if self._session is None:
            return

        if self._rolled_back or self._committed:
            return

        await self._session.rollback()
        self._rolled_back = True
