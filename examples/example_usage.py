"""Ví dụ: dùng service layer (không qua Flask).

Runs a WhatsApp command through the pipeline and prints the dashboard view.
"""

import importlib

from config import get_settings_module

from src.whatsapp_attendance.whatsapp_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    message = container.whatsapp_service.simulate(phone="+5511999999999", text="entrada")
    print(message.response)

    for row in container.attendance_service.list_employees_with_status():
        print(row.to_dict())


if __name__ == "__main__":
    main()
