"""
Configuration Validation
Reports missing application properties without rejecting them
"""
from typing import List

from configmaster.config.settings import APP_PREFIX, AppProperties
from configmaster.utils.logging import get_config_logger


def validate_configuration(properties: AppProperties) -> List[str]:
    """Check the bound properties and log results"""
    validation_logger = get_config_logger()

    issues = []
    for field_name in AppProperties.model_fields:
        if not getattr(properties, field_name):
            issues.append(f"{APP_PREFIX}.{field_name} is not set - rendering as empty string")

    if issues:
        for issue in issues:
            validation_logger.warning(
                f"Configuration issue: {issue}",
                extra={'event_type': 'configuration_validation'}
            )
    else:
        validation_logger.info(
            "Configuration validation passed",
            extra={'event_type': 'configuration_validation'}
        )

    return issues  # Return issues so caller can decide what to do
