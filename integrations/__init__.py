"""
External service integrations.
"""

from integrations.shiphero import ShipHeroClient, PRODUCT_UPDATE_MUTATION

__all__ = [
    "ShipHeroClient",
    "PRODUCT_UPDATE_MUTATION",
]
