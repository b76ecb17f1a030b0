# openchoreo/catalog/main.py
"""
Catalog synchronization factory.

Wires settings, YAML overrides, the OpenChoreo API client, the entity
translator and the template synthesizer into an entity provider, and
builds the form lookups and the component-create step handler. The
scheduler that triggers runs and the catalog sink are supplied by the
host.
"""
from __future__ import annotations

import logging

from openchoreo.catalog.core.actions import CreateComponentAction
from openchoreo.catalog.core.clients.openchoreo import OpenChoreoApiClient
from openchoreo.catalog.core.config import Settings
from openchoreo.catalog.core.form_schemas import FormSchemaService
from openchoreo.catalog.core.loader import ProviderConfig, load_provider_config
from openchoreo.catalog.core.logging import configure_logging
from openchoreo.catalog.core.provider import OpenChoreoEntityProvider
from openchoreo.catalog.core.templates.synthesizer import TemplateSynthesizer
from openchoreo.catalog.core.translators import EntityTranslator

logger = logging.getLogger(__name__)


def load_config(settings: Settings | None = None) -> ProviderConfig:
    settings = settings or Settings()
    config = load_provider_config(settings.config_paths, settings)
    if not config.base_url:
        raise ValueError(
            "OpenChoreo base URL is not configured "
            "(set OPENCHOREO_BASE_URL or openchoreo.baseUrl)"
        )
    return config


def create_client(config: ProviderConfig) -> OpenChoreoApiClient:
    return OpenChoreoApiClient(
        base_url=config.base_url,
        token=config.token,
        timeout=config.timeout,
    )


def create_provider(settings: Settings | None = None) -> OpenChoreoEntityProvider:
    settings = settings or Settings()
    configure_logging(settings.log_level, json=settings.log_json)
    logger.info("Creating OpenChoreo entity provider (env=%s)", settings.app_env)

    config = load_config(settings)
    provider = OpenChoreoEntityProvider(
        client=create_client(config),
        translator=EntityTranslator(default_owner=config.default_owner),
        synthesizer=TemplateSynthesizer(
            default_owner=config.default_owner,
            namespace=config.template_namespace,
        ),
        schema_fetch_concurrency=config.schema_fetch_concurrency,
        page_size=config.page_size,
    )
    logger.info(
        "Provider %s targets %s (owner=%s, template namespace=%s)",
        provider.get_provider_name(),
        config.base_url,
        config.default_owner,
        config.template_namespace,
    )
    return provider


def create_form_schema_service(settings: Settings | None = None) -> FormSchemaService:
    return FormSchemaService(client=create_client(load_config(settings)))


def create_component_action(settings: Settings | None = None) -> CreateComponentAction:
    return CreateComponentAction(client=create_client(load_config(settings)))
