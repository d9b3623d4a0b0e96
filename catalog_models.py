"""Value types for catalog products and their prices."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Money:
    """Price as a currency code plus whole units and nanos (units of 10^-9)."""

    currency_code: str
    units: int
    nanos: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currencyCode": self.currency_code,
            "units": self.units,
            "nanos": self.nanos,
        }


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    picture: str
    price_usd: Money
    categories: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Shape used by the catalog JSON document served to the storefront."""

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "picture": self.picture,
            "priceUsd": self.price_usd.to_dict(),
            "categories": list(self.categories),
        }
