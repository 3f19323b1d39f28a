from __future__ import annotations

import atexit
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .messaging.mysql_message_repository import MySQLMessageRepository
from .messaging.pipeline import MessageProcessor
from .messaging.repository import MessageRepository
from .messaging.service import WhatsAppService
from .messaging.zapi import LoggingReplySender, ReplySender, ZApiClient, ZApiConfig
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    messages_repo: MessageRepository
    settings_repo: SettingsRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    settings_service: SettingsService
    message_processor: MessageProcessor
    whatsapp_service: WhatsAppService


def assemble(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    messages_repo: MessageRepository,
    settings_repo: SettingsRepository,
    reply_sender: Optional[ReplySender] = None,
    enforce_transitions: bool = True,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of any set of repositories (MySQL or in-memory)."""

    settings_service = SettingsService(settings_repo)
    processor = MessageProcessor(
        employees_repo,
        attendance_repo,
        messages_repo,
        settings=settings_service,
        clock=clock,
        enforce_transitions=enforce_transitions,
    )
    whatsapp_service = WhatsAppService(
        messages_repo,
        processor,
        reply_sender or LoggingReplySender(),
        settings=settings_service,
        clock=clock,
    )

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        messages_repo=messages_repo,
        settings_repo=settings_repo,
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, messages_repo),
        settings_service=settings_service,
        message_processor=processor,
        whatsapp_service=whatsapp_service,
    )


def build_container(
    *,
    db_config: dict,
    zapi_config: Optional[ZApiConfig] = None,
    enforce_transitions: bool = True,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    reply_sender = None
    if zapi_config:
        reply_sender = ZApiClient(zapi_config)
        # One HTTP client for the process lifetime.
        atexit.register(reply_sender.close)

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        messages_repo=MySQLMessageRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        reply_sender=reply_sender,
        enforce_transitions=enforce_transitions,
    )
