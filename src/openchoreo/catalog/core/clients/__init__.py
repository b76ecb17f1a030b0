from openchoreo.catalog.core.clients.openchoreo import OpenChoreoApiClient, OpenChoreoApiError

__all__ = ["OpenChoreoApiClient", "OpenChoreoApiError"]
