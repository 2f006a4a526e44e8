"""GCP client factory for creating Container API clients."""

from typing import Dict, Any
import structlog
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from gkecatalog.core.exceptions import ClientConnectionException
from .gke_client import GkeClient

logger = structlog.get_logger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class GcpClientFactory:
    """Factory for creating GCP service clients."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.credentials_file = config.get("credentials_file")
        self._credentials = None
        self.logger = logger.bind(factory="gcp")

    def _get_credentials(self):
        """Get GCP credentials based on configuration.

        Returns None when no key file is configured so the SDK falls back to
        application default credentials.
        """
        if not self.credentials_file:
            self.logger.info("Using application default credentials")
            return None
        if self._credentials:
            return self._credentials

        try:
            self._credentials = service_account.Credentials.from_service_account_file(
                self.credentials_file,
                scopes=[CLOUD_PLATFORM_SCOPE],
            )
            self.logger.info("Using service account credentials", credentials_file=self.credentials_file)
            return self._credentials
        except (GoogleAuthError, OSError, ValueError) as e:
            raise ClientConnectionException("GCP", f"Failed to load credentials: {e}")

    def create_gke_client(self) -> GkeClient:
        """Create a GKE client. The client still has to be connected."""
        return GkeClient(credentials=self._get_credentials(), config=self.config)
