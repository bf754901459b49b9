from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_NAME
from ..core.enums import Role, SessionState
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .identity import IdentityProvider, Subject
from .model import AppUser
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Resolved signed-in session, handed to request handlers and services."""

    user: AppUser
    state: SessionState
    employee: Optional[Employee] = None

    @property
    def role(self) -> Role:
        return self.user.role

    @property
    def is_admin(self) -> bool:
        return self.user.role == Role.ADMIN

    @property
    def employee_id(self) -> Optional[int]:
        return self.employee.employee_id if self.employee else None


class SessionResolver:
    """Maps identity-provider callbacks to an application session.

    States: unauthenticated -> resolving -> authenticated_admin |
    authenticated_employee | rejected. Resolution runs to completion before
    the caller gets a context back.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        users: UserRepository,
        employees: EmployeeRepository,
        *,
        admin_email: str = DEFAULT_ADMIN_EMAIL,
    ):
        self._identity = identity
        self._users = users
        self._employees = employees
        self._admin_email = (admin_email or "").strip().lower()
        self.state = SessionState.UNAUTHENTICATED
        self.context: Optional[SessionContext] = None

    def _finish(self, state: SessionState, context: Optional[SessionContext] = None) -> Optional[SessionContext]:
        self.state = state
        self.context = context
        return context

    def sign_in(self, email: str, password: str) -> Optional[SessionContext]:
        """Sign in with the provider; IdentityError propagates to the caller."""

        subject = self._identity.sign_in(email, password)
        return self.on_auth_state_changed(subject)

    def sign_out(self) -> None:
        if self.context is not None:
            self._identity.sign_out(self.context.user.user_id)
        self._finish(SessionState.UNAUTHENTICATED)

    def on_auth_state_changed(self, subject: Optional[Subject]) -> Optional[SessionContext]:
        if subject is None:
            return self._finish(SessionState.UNAUTHENTICATED)

        self.state = SessionState.RESOLVING
        try:
            user = self._users.get_by_id(subject.uid)
            if user is None:
                email = (subject.email or "").strip().lower()
                if email and email == self._admin_email:
                    user = AppUser(user_id=subject.uid, email=email, name=DEFAULT_ADMIN_NAME, role=Role.ADMIN)
                else:
                    logger.warning("No application user for subject %s; signing out", subject.uid)
                    self._identity.sign_out(subject.uid)
                    return self._finish(SessionState.REJECTED)

            if user.role == Role.ADMIN:
                return self._finish(
                    SessionState.AUTHENTICATED_ADMIN,
                    SessionContext(user=user, state=SessionState.AUTHENTICATED_ADMIN),
                )

            employee = self._employees.get_by_user_id(user.user_id)
            return self._finish(
                SessionState.AUTHENTICATED_EMPLOYEE,
                SessionContext(user=user, state=SessionState.AUTHENTICATED_EMPLOYEE, employee=employee),
            )
        except Exception:
            logger.exception("Error resolving session for subject %s", subject.uid)
            return self._finish(SessionState.UNAUTHENTICATED)
