"""
Catalog store: the product records served by the web layer.

The catalog is read once from a static JSON file and never changes afterwards.
Products are addressed by their position in the file, so the order of the
records is part of the contract and is never altered.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Tuple

from slugify import slugify

from errors import CatalogError
from logging_util import log


@dataclass(frozen=True)
class Product:
    """One product record. Absent fields are kept as None."""

    id: Any = None
    product_name: Any = None
    image: Any = None
    quantity: Any = None
    price: Any = None
    origin: Any = None          # "from" in the data file
    nutrients: Any = None
    description: Any = None
    organic: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=data.get("id"),
            product_name=data.get("productName"),
            image=data.get("image"),
            quantity=data.get("quantity"),
            price=data.get("price"),
            origin=data.get("from"),
            nutrients=data.get("nutrients"),
            description=data.get("description"),
            organic=data.get("organic"),
        )

    @property
    def slug(self) -> str:
        return slugify(str(self.product_name or ""), lowercase=True)


class CatalogStore:
    """Immutable, position-indexed sequence of products plus the raw source bytes."""

    def __init__(self, products: Tuple[Product, ...], raw: bytes):
        self._products = tuple(products)
        self._raw = raw
        self._slugs = tuple(p.slug for p in self._products)

    @classmethod
    def load(cls, path) -> "CatalogStore":
        """Read and parse the catalog file. Raises CatalogError on any problem."""
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise CatalogError(f"Catalog {path} must be a JSON array, got {type(data).__name__}")
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise CatalogError(f"Catalog {path}: entry {i} is not an object")

        products = tuple(Product.from_dict(item) for item in data)
        log("info", f"Loaded {len(products)} product(s) from {path}")
        return cls(products, raw)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    @property
    def raw(self) -> bytes:
        """The catalog file exactly as it was read."""
        return self._raw

    @property
    def slugs(self) -> Tuple[str, ...]:
        return self._slugs

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def get(self, position) -> Optional[Product]:
        """
        Return the product at *position*, or None.

        *position* may be an int or the raw query-string value. Strings must be
        canonical indexes ("1", not "01" or " 1"). Anything that is not a
        non-negative in-range integer yields None; negative values never wrap
        around to the end of the catalog.
        """
        if isinstance(position, bool):
            return None
        if isinstance(position, str):
            if not (position.isascii() and position.isdigit()):
                return None
            if len(position) > 1 and position.startswith("0"):
                return None
            # more digits than any valid index
            if len(position) > len(str(len(self._products))):
                return None
            position = int(position)
        if not isinstance(position, int):
            return None
        if 0 <= position < len(self._products):
            return self._products[position]
        return None
