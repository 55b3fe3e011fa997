# croctop/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from croctop.services._shared.errors import AuthorizationError, UnauthenticatedError
from croctop.services._shared.policies.common import is_owner
from croctop.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data into services.

    :param actor_id: Authenticated user id, ``None`` for anonymous calls.
    :param role: Role embedded in the caller's token. Informational only.
    :param request_id: Correlation id for logging.
    """

    actor_id: int | None = None
    role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Open read-only and read-write units of work.
    * Hold the shared ownership check.

    Notes
    -----
    - Services never touch the global session directly; always a Unit of Work.
    - HTTP translation of service errors happens in ``croctop.core.errors``.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Isolation level hint; defaults to ``DEFAULT_READ_ISOLATION``.
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # --------------------------- AuthZ --------------------------------

    def require_actor(self) -> int:
        """
        Return the authenticated actor id.

        :raises UnauthenticatedError: When the context carries no actor.
        """
        if self.ctx.actor_id is None:
            raise UnauthenticatedError()
        return self.ctx.actor_id

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the resource.

        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You are not the owner of this resource.")
