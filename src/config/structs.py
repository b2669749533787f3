from typing import Dict
from msgspec import Struct

from exchanges.structs.types import ExchangeName


class NetworkConfig(Struct, frozen=True):
    """
    Network configuration settings.

    Attributes:
        request_timeout: HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
    """
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    def validate(self) -> None:
        """Validate network configuration."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")


class ExchangeCredentials(Struct, frozen=True):
    """Exchange API credentials."""
    api_key: str = ""
    secret_key: str = ""

    @property
    def has_private_api(self) -> bool:
        """Check if both credentials are provided."""
        return bool(self.api_key) and bool(self.secret_key)

    def get_preview(self) -> str:
        """Get safe preview of credentials for logging."""
        if not self.api_key:
            return "Not configured"
        if len(self.api_key) > 8:
            return f"{self.api_key[:4]}...{self.api_key[-4:]}"
        return "***"

    def validate(self) -> None:
        """Validate credentials (allows empty for public-only mode)."""
        if not self.api_key and not self.secret_key:
            return

        # If one is provided, both should be provided for consistency
        if bool(self.api_key) != bool(self.secret_key):
            raise ValueError("Both api_key and secret_key must be provided together or both empty")


class ExchangeConfig(Struct, frozen=True):
    """
    Complete exchange configuration including credentials and endpoints.

    Attributes:
        name: Exchange name (e.g., 'nominex')
        credentials: API credentials
        base_url: Production host
        demo_url: Demo (sandbox) host
        demo: Route requests to ``demo_url`` instead of ``base_url``
        public_path: Path prefix of public endpoints
        private_path: Path prefix of private endpoints, also part of the signed payload
        network: Network configuration
        enabled: Whether the exchange is enabled
    """
    name: ExchangeName
    credentials: ExchangeCredentials = ExchangeCredentials()
    base_url: str = "https://nominex.io"
    demo_url: str = "https://demo.nominex.io"
    demo: bool = False
    public_path: str = "/api/rest/v1"
    private_path: str = "/api/rest/v1/private"
    network: NetworkConfig = NetworkConfig()
    enabled: bool = True

    @property
    def host(self) -> str:
        """Host selected by the demo flag."""
        return self.demo_url if self.demo else self.base_url

    @property
    def api_urls(self) -> Dict[str, str]:
        """Root URL of each API section ('public', 'private')."""
        return {
            'public': self.host + self.public_path,
            'private': self.host + self.private_path,
        }

    def has_credentials(self) -> bool:
        """Check if exchange has valid credentials for private operations."""
        return self.credentials.has_private_api

    def is_public_only(self) -> bool:
        """Check if exchange is configured for public-only operations."""
        return not self.has_credentials()

    def validate(self) -> None:
        """Validate the whole configuration, raising ValueError on the first problem."""
        if not self.name:
            raise ValueError("name is required")
        for field_name, url in (('base_url', self.base_url), ('demo_url', self.demo_url)):
            if not url.startswith(('http://', 'https://')):
                raise ValueError(f"{field_name} must start with http:// or https://, got: {url}")
        for field_name, path in (('public_path', self.public_path), ('private_path', self.private_path)):
            if not path.startswith('/'):
                raise ValueError(f"{field_name} must start with '/', got: {path}")
        self.credentials.validate()
        self.network.validate()
