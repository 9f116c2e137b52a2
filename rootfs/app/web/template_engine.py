"""
Minimal template engine for the catalog pages.

Templates are plain HTML with ``{%NAME%}`` placeholders. Rendering is a single
pass over the template: every placeholder is looked up in a name -> value
mapping and substituted values are never scanned again, so a product text that
happens to contain ``{%...%}`` shows up verbatim. Unknown names are left alone.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from catalog import Product
from errors import TemplateError
from logging_util import log

PLACEHOLDER_RE = re.compile(r"\{%([A-Z_]+)%\}")

# Rendered for absent fields and for lookups past the end of the catalog
UNDEFINED = "undefined"

# Placeholder -> Product attribute, in resolution order. NOT_ORGANIC is derived.
PRODUCT_FIELDS = (
    ("PRODUCTNAME", "product_name"),
    ("IMAGE", "image"),
    ("QUANTITY", "quantity"),
    ("PRICE", "price"),
    ("ID", "id"),
    ("FROM", "origin"),
    ("NUTRIENTS", "nutrients"),
    ("DESCRIPTION", "description"),
)
NOT_ORGANIC = "NOT_ORGANIC"
PRODUCT_CARDS = "PRODUCT_CARDS"

OVERVIEW_TEMPLATE = "template-overview.html"
CARD_TEMPLATE = "template-card.html"
PRODUCT_TEMPLATE = "template-product.html"


def to_text(value) -> str:
    """
    String form of a JSON value as it appears on a page.

    JSON null and absent fields both render as ``undefined``. Lists are joined
    with commas, null items as empty strings.
    """
    if value is None:
        return UNDEFINED
    if isinstance(value, list):
        return ",".join("" if v is None else to_text(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def product_values(product: Optional[Product]) -> Dict[str, str]:
    """Resolve every recognized placeholder for *product* (None = missing record)."""
    values = {
        name: to_text(getattr(product, attr, None))
        for name, attr in PRODUCT_FIELDS
    }
    organic = getattr(product, "organic", None)
    # Not a boolean rendering: a truthy flag is shown as its own value
    values[NOT_ORGANIC] = to_text(organic) if organic else "not-organic"
    return values


def substitute(template: str, values: Dict[str, str]) -> str:
    """Replace each ``{%NAME%}`` found in *values*; leave every other token as is."""
    return PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def render(template: str, product: Optional[Product]) -> str:
    return substitute(template, product_values(product))


def render_overview(template: str, cards: Iterable[str]) -> str:
    """Insert the concatenated card fragments at the ``{%PRODUCT_CARDS%}`` marker."""
    return substitute(template, {PRODUCT_CARDS: "".join(cards)})


@dataclass(frozen=True)
class TemplateSet:
    """The three page templates, read once at startup."""

    overview: str
    card: str
    product: str

    @classmethod
    def load(cls, template_dir) -> "TemplateSet":
        """Read all templates from *template_dir*. Raises TemplateError if one is missing."""
        template_dir = Path(template_dir)
        texts = {}
        for name in (OVERVIEW_TEMPLATE, CARD_TEMPLATE, PRODUCT_TEMPLATE):
            path = template_dir / name
            try:
                texts[name] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise TemplateError(f"Template not found or unreadable: {path} ({e})") from e
        log("info", f"Loaded templates from {template_dir}")
        return cls(
            overview=texts[OVERVIEW_TEMPLATE],
            card=texts[CARD_TEMPLATE],
            product=texts[PRODUCT_TEMPLATE],
        )
