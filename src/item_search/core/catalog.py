"""Catalog data types and the search-record projector.

// [LAW:one-source-of-truth] SearchRecord is the only shape the matcher and
// the result list ever see. CatalogItem stays external and read-only.
// [LAW:dataflow-not-control-flow] project() always walks the whole catalog;
// disabled items are dropped by a filter, not by early returns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

FLEA_MARKET_SOURCE = "flea-market"
DISABLED_TAG = "disabled"
PLACEHOLDER_ICON_PATH = "/images/unknown-item-icon.jpg"


# ─── Data types ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BuyOffer:
    """Where an item can be bought, and for how much."""

    source: str
    price: float | None = None


@dataclass(frozen=True)
class CatalogItem:
    """One catalog entry as supplied by the external data layer."""

    id: str
    name: str
    short_name: str = ""
    normalized_name: str = ""
    avg24h_price: float | None = None
    last_low_price: float | None = None
    icon_link: str | None = None
    types: frozenset[str] = frozenset()
    buy_for: tuple[BuyOffer, ...] = ()
    trader_name: str | None = None
    trader_normalized_name: str | None = None
    trader_price: float | None = None
    trader_price_rub: float | None = None
    trader_currency: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> CatalogItem:
        """Build an item from a catalog JSON object (camelCase keys)."""
        offers = tuple(
            BuyOffer(source=str(offer.get("source", "")), price=_as_number(offer.get("price")))
            for offer in data.get("buyFor") or ()
            if isinstance(offer, dict)
        )
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            short_name=str(data.get("shortName") or ""),
            normalized_name=str(data.get("normalizedName") or ""),
            avg24h_price=_as_number(data.get("avg24hPrice")),
            last_low_price=_as_number(data.get("lastLowPrice")),
            icon_link=data.get("iconLink") or None,
            types=_as_tags(data.get("types")),
            buy_for=offers,
            trader_name=data.get("traderName"),
            trader_normalized_name=data.get("traderNormalizedName"),
            trader_price=_as_number(data.get("traderPrice")),
            trader_price_rub=_as_number(data.get("traderPriceRUB")),
            trader_currency=data.get("traderCurrency"),
        )


@dataclass(frozen=True)
class SearchRecord:
    """Flattened, match-ready view of a CatalogItem.

    The category tag set is consumed during projection and not kept.
    """

    id: str
    name: str
    short_name: str
    normalized_name: str
    avg24h_price: float | None
    last_low_price: float | None
    icon_link: str
    insta_profit: float
    item_link: str
    trader_name: str | None = None
    trader_normalized_name: str | None = None
    trader_price: float | None = None
    trader_price_rub: float | None = None
    trader_currency: str | None = None
    # Lowercased match fields, computed once per projection
    search_fields: tuple[str, str, str] = field(default=("", "", ""), repr=False, compare=False)


# ─── Parsing ─────────────────────────────────────────────────────────────────


def _as_number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_tags(value) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, (list, tuple)):
        return frozenset(str(tag) for tag in value)
    # A bare string is one tag, never a sequence of characters
    if isinstance(value, str):
        logger.warning("Catalog types given as a string, treating %r as one tag", value)
        return frozenset((value,))
    logger.warning("Ignoring catalog types of type %s", type(value).__name__)
    return frozenset()


def load_catalog(raw_items: Iterable | None) -> tuple[CatalogItem, ...]:
    """Parse catalog JSON objects. Entries that are not objects are skipped."""
    items: list[CatalogItem] = []
    for index, raw in enumerate(raw_items or ()):
        if not isinstance(raw, dict):
            logger.warning("Skipping catalog entry %d: expected object, got %s", index, type(raw).__name__)
            continue
        items.append(CatalogItem.from_dict(raw))
    return tuple(items)


# ─── Projection ──────────────────────────────────────────────────────────────


def cheapest_flea_offer(item: CatalogItem) -> BuyOffer | None:
    """Return the lowest-priced flea-market buy offer, or None."""
    offers = [
        offer
        for offer in item.buy_for
        if offer.source == FLEA_MARKET_SOURCE and offer.price is not None
    ]
    if not offers:
        return None
    return min(offers, key=lambda offer: offer.price)


def insta_profit(item: CatalogItem) -> float:
    """Trader price minus the cheapest flea-market buy price; 0 if either is missing."""
    offer = cheapest_flea_offer(item)
    if offer is None or item.trader_price_rub is None:
        return 0
    return item.trader_price_rub - offer.price


def placeholder_icon(public_url: str = "") -> str:
    return f"{public_url.rstrip('/')}{PLACEHOLDER_ICON_PATH}"


def to_search_record(item: CatalogItem, public_url: str = "") -> SearchRecord:
    return SearchRecord(
        id=item.id,
        name=item.name,
        short_name=item.short_name,
        normalized_name=item.normalized_name,
        avg24h_price=item.avg24h_price,
        last_low_price=item.last_low_price,
        icon_link=item.icon_link or placeholder_icon(public_url),
        insta_profit=insta_profit(item),
        item_link=f"/item/{item.normalized_name}",
        trader_name=item.trader_name,
        trader_normalized_name=item.trader_normalized_name,
        trader_price=item.trader_price,
        trader_price_rub=item.trader_price_rub,
        trader_currency=item.trader_currency,
        search_fields=(
            item.name.lower(),
            item.short_name.lower(),
            item.normalized_name.lower(),
        ),
    )


def project(catalog: Iterable[CatalogItem] | None, public_url: str = "") -> list[SearchRecord]:
    """Project the catalog into search records, in catalog order.

    A missing catalog (not loaded yet) projects to no records.
    """
    return [
        to_search_record(item, public_url)
        for item in catalog or ()
        if DISABLED_TAG not in item.types
    ]
