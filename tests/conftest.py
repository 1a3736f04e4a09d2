"""
Pytest configuration and shared fixtures

Provides common test fixtures for documents, editing sessions and configuration.
"""

from datetime import datetime

import pytest

from report_studio.config import ReportConfig, reset_config
from report_studio.domain.defaults import default_document
from report_studio.domain.document import LineItem, ResourceStat, ThreatStat
from report_studio.domain.session import EditingSession

CONFIG_ENV_VARS = (
    "REPORT_OUTPUT_DIR",
    "REPORT_LOG_LEVEL",
    "REPORT_LOG_JSON",
    "REPORT_BAR_REFERENCE_FLOOR",
    "REPORT_BAR_MIN_FRACTION",
    "REPORT_PIE_ROTATION",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from the caller's REPORT_* environment and the cached config"""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


# ===== Document Fixtures =====


@pytest.fixture
def document():
    """Provide the default sample document"""
    return default_document()


@pytest.fixture
def session():
    """Provide an editing session started from the default document"""
    return EditingSession()


@pytest.fixture
def config():
    """Provide a configuration with default chart conventions"""
    return ReportConfig()


@pytest.fixture
def sample_timestamp():
    """Provide a consistent timestamp for testing"""
    return datetime(2025, 6, 1, 9, 30, 0)


@pytest.fixture
def sample_line_items():
    """Provide the sample invoice lines (subtotal 4840)"""
    return (
        LineItem(id="1", description="Monthly Security Management Fee", quantity=1, unit_price=4500),
        LineItem(id="2", description="Re:Veil License", quantity=2, unit_price=45),
        LineItem(id="3", description="Priority Support", quantity=1, unit_price=250),
    )


@pytest.fixture
def sample_threat_stats():
    """Provide the sample threat breakdown (total 14,280)"""
    return (
        ThreatStat(name="Port Scan", count=8500, color="#64748b"),
        ThreatStat(name="SQL Injection", count=1200, color="#ef4444"),
        ThreatStat(name="XSS Attempt", count=800, color="#f59e0b"),
        ThreatStat(name="Malware Download", count=150, color="#8b5cf6"),
        ThreatStat(name="Brute Force", count=3630, color="#3b82f6"),
    )


@pytest.fixture
def cpu_series():
    """Provide a monthly CPU series"""
    return tuple(
        ResourceStat(month=month, value=value)
        for month, value in zip(("1月", "2月", "3月", "4月", "5月"), (30, 28, 35, 65, 40))
    )
