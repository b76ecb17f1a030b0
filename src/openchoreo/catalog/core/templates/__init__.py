from openchoreo.catalog.core.templates.synthesizer import (
    TemplateSynthesizer,
    addons_section,
    ci_section,
    configuration_section,
    metadata_section,
    parameter_token,
)

__all__ = [
    "TemplateSynthesizer",
    "addons_section",
    "ci_section",
    "configuration_section",
    "metadata_section",
    "parameter_token",
]
