from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_ADMIN_EMAIL
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .extras.mysql_extra_repository import MySQLExtraRepository
from .extras.repository import ExtraRepository
from .extras.service import ExtraService
from .reports.dashboard import DashboardService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository, MySQLWeeklyScheduleRepository
from .schedules.repository import ScheduleRepository, WeeklyScheduleRepository
from .schedules.service import ScheduleService
from .users.identity import IdentityProvider, MySQLIdentityProvider
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.session import SessionResolver
from .vacations.accrual.factory import policy_for
from .vacations.mysql_vacation_repository import MySQLVacationRepository
from .vacations.repository import VacationRepository
from .vacations.service import VacationService


@dataclass(frozen=True)
class Container:
    identity: IdentityProvider

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    schedules_repo: ScheduleRepository
    weekly_repo: WeeklyScheduleRepository
    vacations_repo: VacationRepository
    extras_repo: ExtraRepository

    employee_service: EmployeeService
    schedule_service: ScheduleService
    vacation_service: VacationService
    extra_service: ExtraService
    dashboard_service: DashboardService

    admin_email: str = DEFAULT_ADMIN_EMAIL

    def make_session_resolver(self) -> SessionResolver:
        # One resolver per request; it carries per-session state.
        return SessionResolver(
            self.identity,
            self.users_repo,
            self.employees_repo,
            admin_email=self.admin_email,
        )


def build_services(
    *,
    identity: IdentityProvider,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    schedules_repo: ScheduleRepository,
    weekly_repo: WeeklyScheduleRepository,
    vacations_repo: VacationRepository,
    extras_repo: ExtraRepository,
    vacation_policy: str = "monthly",
    admin_email: str = DEFAULT_ADMIN_EMAIL,
) -> Container:
    """Wire services over the given repositories (MySQL or in-memory)."""

    vacation_service = VacationService(vacations_repo, employees_repo, policy_for(vacation_policy))
    return Container(
        identity=identity,
        users_repo=users_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        weekly_repo=weekly_repo,
        vacations_repo=vacations_repo,
        extras_repo=extras_repo,
        employee_service=EmployeeService(employees_repo, users_repo, identity),
        schedule_service=ScheduleService(schedules_repo, weekly_repo, employees_repo),
        vacation_service=vacation_service,
        extra_service=ExtraService(extras_repo, employees_repo),
        dashboard_service=DashboardService(
            employees_repo,
            schedules_repo,
            vacations_repo,
            extras_repo,
            vacation_service,
        ),
        admin_email=admin_email,
    )


def build_container(
    *,
    db_config: dict,
    vacation_policy: str = "monthly",
    admin_email: str = DEFAULT_ADMIN_EMAIL,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        identity=MySQLIdentityProvider(conn),
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        weekly_repo=MySQLWeeklyScheduleRepository(conn),
        vacations_repo=MySQLVacationRepository(conn),
        extras_repo=MySQLExtraRepository(conn),
        vacation_policy=vacation_policy,
        admin_email=admin_email,
    )
