"""Test configuration and fixtures."""

import logging
from typing import Any, Dict

import pytest


def _close_loggers():
    """Close handlers attached to bxregistry loggers."""
    for logger_name in list(logging.Logger.manager.loggerDict):
        if logger_name.startswith("bxregistry."):
            logger = logging.getLogger(logger_name)
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _release_loggers():
    yield
    _close_loggers()


@pytest.fixture
def time_block() -> Dict[str, Any]:
    """A `time` block as Bitrix sends it."""
    return {
        "start": 1700000000.123,
        "finish": 1700000000.456,
        "duration": 0.333,
        "processing": 0.2,
        "date_start": "2023-11-14T22:13:20+00:00",
        "date_finish": "2023-11-14T22:13:20+00:00",
    }


@pytest.fixture
def deal_row() -> Dict[str, Any]:
    """A deal record with a custom field."""
    return {
        "ID": "42",
        "TITLE": "Annual license",
        "STAGE_ID": "NEW",
        "PROBABILITY": "60",
        "CURRENCY_ID": "EUR",
        "OPPORTUNITY": "12000.00",
        "CONTACT_ID": "7",
        "ASSIGNED_BY_ID": "1",
        "OPENED": "Y",
        "CLOSED": "N",
        "UF_CRM_1700000000": "partner",
    }


@pytest.fixture
def user_row() -> Dict[str, Any]:
    return {
        "ID": "1",
        "ACTIVE": True,
        "NAME": "Anna",
        "LAST_NAME": "Smirnova",
        "EMAIL": "anna@example.com",
        "UF_DEPARTMENT": [1, 5],
        "IS_ONLINE": "N",
    }


@pytest.fixture
def deal_list_body(deal_row, time_block) -> Dict[str, Any]:
    """A first page of crm.deal.list."""
    return {
        "result": [deal_row, {**deal_row, "ID": "43", "TITLE": "Support"}],
        "total": 120,
        "next": 50,
        "time": time_block,
    }


@pytest.fixture
def batch_commands() -> Dict[str, Any]:
    """Batch params mixing a get, a list and an add."""
    return {
        "halt": 0,
        "cmd": {
            "me": {"method": "user.get", "params": {"id": "1"}},
            "deals": {
                "method": "crm.deal.list",
                "params": {"order": {"ID": "ASC"}, "select": ["ID", "TITLE"]},
            },
            "new_lead": {"method": "crm.lead.add", "params": {"fields": {"TITLE": "Inbound"}}},
        },
    }


@pytest.fixture
def batch_body(user_row, deal_row, time_block) -> Dict[str, Any]:
    """Response of `batch_commands` where the lead add failed."""
    return {
        "result": {
            "result": {
                "me": user_row,
                "deals": [deal_row],
            },
            "result_error": {
                "new_lead": {
                    "error": "ACCESS_DENIED",
                    "error_description": "Access denied.",
                },
            },
            "result_total": {"deals": 1},
            "result_next": [],
            "result_time": {"me": time_block, "deals": time_block},
        },
        "time": time_block,
    }
