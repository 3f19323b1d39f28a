"""Retry messages left unprocessed after a storage failure.

Meant for cron: the webhook answers 503 while the database is down, and
anything stored but not completed is picked up here.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.whatsapp_attendance.whatsapp_attendance.container import build_container
from src.whatsapp_attendance.whatsapp_attendance.core.constants import DEFAULT_PENDING_BATCH


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=DEFAULT_PENDING_BATCH)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        enforce_transitions=bool(getattr(settings, "ENFORCE_TRANSITIONS", True)),
    )
    done = container.message_processor.process_pending(limit=args.limit)
    print(f"OK: processed {len(done)} pending message(s)")


if __name__ == "__main__":
    main()
