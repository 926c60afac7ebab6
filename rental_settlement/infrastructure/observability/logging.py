"""Structured JSON logging for settlement auditing"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger import jsonlogger

# Every engine logger lives under this name
PACKAGE_LOGGER = "rental_settlement"


class SettlementJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records stamped with UTC time, level and the owning service"""

    def __init__(self, service_name: str, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str, service_name: str, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Route the engine's loggers to one JSON handler.

    Only the package logger is touched, so the host application's own
    logging setup is left alone. Calling again replaces the earlier handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for existing in list(logger.handlers):
        if isinstance(existing.formatter, SettlementJsonFormatter):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(SettlementJsonFormatter(service_name, "%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return handler


def log_settlement(
    cycle_number: int,
    fully_paid_bill_count: int,
    total_owed: Decimal,
    available_amount: Decimal,
    forfeited_amount: Decimal,
    final_balance: Decimal,
    is_room_transfer: bool,
) -> None:
    """Log structured move-out settlement outcome for auditing"""
    logging.getLogger(__name__).info(
        "Settlement computed",
        extra={
            "step": "settlement_complete",
            "cycle_number": cycle_number,
            "fully_paid_bill_count": fully_paid_bill_count,
            "total_owed": str(total_owed),
            "available_amount": str(available_amount),
            "forfeited_amount": str(forfeited_amount),
            "final_balance": str(final_balance),
            "is_room_transfer": is_room_transfer,
        },
    )
