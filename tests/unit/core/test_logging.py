"""
Tests for the shared logging helpers.
"""

import json
import logging
from uuid import uuid4

from clinic_scheduler.core.shared.logger import (
    JSONFormatter,
    TenantContextFilter,
    TextFormatter,
    get_use_case_logger,
)
from clinic_scheduler.core.tenancy import TenantContext, set_tenant_context


def make_record(message: str = "Appointment created", **fields) -> logging.LogRecord:
    record = logging.LogRecord("use_case.create_appointment", logging.INFO, __file__, 1, message, None, None)
    if fields:
        record.fields = fields
    return record


def test_filter_stamps_current_tenant():
    tenant_id = uuid4()
    record = make_record()
    set_tenant_context(TenantContext(tenant_id=tenant_id, role="OWNER"))
    try:
        TenantContextFilter().filter(record)
    finally:
        set_tenant_context(None)

    assert record.tenant_id == str(tenant_id)


def test_filter_outside_request():
    record = make_record()

    TenantContextFilter().filter(record)

    assert record.tenant_id == "-"


def test_json_formatter_merges_fields():
    record = make_record(appointment_id="abc")
    record.tenant_id = "t1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Appointment created"
    assert payload["tenant_id"] == "t1"
    assert payload["appointment_id"] == "abc"


def test_text_formatter_appends_fields():
    record = make_record(code="TIME_CONFLICT")
    record.tenant_id = "t1"

    line = TextFormatter().format(record)

    assert "tenant=t1" in line
    assert line.endswith("code=TIME_CONFLICT")
    assert record.levelname == "INFO"


def test_context_logger_passes_fields(caplog):
    log = get_use_case_logger("delete_appointment").with_context(appointment_id="a1")

    with caplog.at_level(logging.INFO, logger="use_case.delete_appointment"):
        log.info("Appointment deleted", status="CANCELLED")

    record = caplog.records[-1]
    assert record.fields == {"use_case": "delete_appointment", "appointment_id": "a1", "status": "CANCELLED"}
