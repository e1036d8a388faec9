"""Tests for the startup configuration check."""

from configmaster.config.settings import load_app_properties
from configmaster.config.validation import validate_configuration
from configmaster.utils.logging import initialize_logging


def setup_function():
    initialize_logging("testing", "CRITICAL")


def test_complete_configuration_has_no_issues():
    properties = load_app_properties(overrides={
        "app.name": "ConfigMaster",
        "app.description": "Demo service",
        "app.version": "1.0.0",
    })
    assert validate_configuration(properties) == []


def test_missing_keys_are_reported():
    properties = load_app_properties(overrides={"app.name": "Widget"})
    issues = validate_configuration(properties)
    assert len(issues) == 2
    assert issues[0].startswith("app.description is not set")
    assert issues[1].startswith("app.version is not set")
