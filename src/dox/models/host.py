"""Deployment target model."""

from enum import Enum


class Host(str, Enum):
    """Deployment target a generated site is rewritten for.

    Each host has its own base URL and link substitution rules; both are
    resolved through ``SiteConfig`` so the domains stay configurable.
    """

    LOCAL = "local"
    DEV = "dev"
    MAIN = "main"
