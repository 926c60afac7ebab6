"""Unit tests for structured JSON logging"""

import io
import json
import logging
import pytest
from decimal import Decimal
from rental_settlement.config import Settings
from rental_settlement.engine import SettlementEngine, create_engine
from rental_settlement.infrastructure.observability.logging import (
    PACKAGE_LOGGER,
    SettlementJsonFormatter,
    log_settlement,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Leave the package logger as it was for other tests"""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_emits_json_with_service_metadata():
    stream = io.StringIO()
    setup_logging("INFO", "billing-worker", stream=stream)

    log_settlement(
        cycle_number=7,
        fully_paid_bill_count=6,
        total_owed=Decimal("1337.74"),
        available_amount=Decimal("12000"),
        forfeited_amount=Decimal("0"),
        final_balance=Decimal("-10662.26"),
        is_room_transfer=False,
    )

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["message"] == "Settlement computed"
    assert record["level"] == "INFO"
    assert record["service"] == "billing-worker"
    assert record["timestamp"]
    assert record["step"] == "settlement_complete"
    assert record["final_balance"] == "-10662.26"


def test_setup_logging_replaces_previous_handler():
    setup_logging("INFO", "first")
    setup_logging("DEBUG", "second")

    logger = logging.getLogger(PACKAGE_LOGGER)
    json_handlers = [h for h in logger.handlers if isinstance(h.formatter, SettlementJsonFormatter)]
    assert len(json_handlers) == 1
    assert json_handlers[0].formatter.service_name == "second"
    assert logger.level == logging.DEBUG


def test_setup_logging_respects_level():
    stream = io.StringIO()
    setup_logging("WARNING", "billing-worker", stream=stream)

    logging.getLogger("rental_settlement.engine").info("Bill generated")
    assert stream.getvalue() == ""


def test_create_engine_configures_logging(capsys):
    engine = create_engine(Settings(_env_file=None, service_name="rental-settlement-test"))

    assert isinstance(engine, SettlementEngine)
    logging.getLogger("rental_settlement.engine").info("Bill generated", extra={"step": "bill_generated"})

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["service"] == "rental-settlement-test"
    assert record["name"] == "rental_settlement.engine"
    assert record["step"] == "bill_generated"
