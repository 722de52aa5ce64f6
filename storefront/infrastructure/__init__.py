"""Infrastructure layer - configuration, logging and locale setup."""

from storefront.infrastructure.collation import apply_collation_locale
from storefront.infrastructure.config import Settings, settings
from storefront.infrastructure.logging_setup import configure_logging

__all__ = ["Settings", "settings", "configure_logging", "apply_collation_locale"]
