"""Catalog types returned by the music API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ..parsing import parse_enum_or_default, parse_json_object

T = TypeVar("T")


class Category(str, Enum):
    """Catalog item categories."""

    UNKNOWN = "unknown"
    ARTIST = "artist"
    ALBUM = "album"
    SINGLE = "single"
    TRACK = "track"
    MIX = "mix"


def _category_of(item: dict[str, Any]) -> Category:
    raw = item.get("category")
    if isinstance(raw, dict):
        raw = raw.get("id")
    return parse_enum_or_default(Category, raw, Category.UNKNOWN)


@dataclass(frozen=True)
class Artist:
    """An artist in the catalog."""

    APP_TO_APP_SHOW_URI = "nokia-music://show/artist/?id={0}"
    APP_TO_APP_PLAY_URI_BY_NAME = "nokia-music://play/artist/?artist={0}"
    WEB_SHOW_URI = "http://www.mixrad.io/artists/-/{0}/"
    WEB_PLAY_URI_BY_NAME = "http://www.mixrad.io/artists/{0}/mix/"

    id: str
    name: str
    country: Optional[str] = None
    genres: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> Artist:
        return cls(
            id=str(item.get("id", "")),
            name=str(item.get("name", "")),
            country=item.get("country"),
            genres=tuple(g.get("name", "") for g in item.get("genres", []) if isinstance(g, dict)),
        )


@dataclass(frozen=True)
class Product:
    """An album, single or track."""

    APP_TO_APP_SHOW_URI = "nokia-music://show/product/?id={0}"
    WEB_SHOW_URI = "http://www.mixrad.io/products/{0}/"

    id: str
    name: str
    category: Category = Category.UNKNOWN
    performers: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> Product:
        creators = item.get("creators") or {}
        performers = creators.get("performers", []) if isinstance(creators, dict) else []
        return cls(
            id=str(item.get("id", "")),
            name=str(item.get("name", "")),
            category=_category_of(item),
            performers=tuple(p.get("name", "") for p in performers if isinstance(p, dict)),
            genres=tuple(g.get("name", "") for g in item.get("genres", []) if isinstance(g, dict)),
        )


@dataclass(frozen=True)
class Mix:
    """A curated radio mix."""

    APP_TO_APP_PLAY_URI = "nokia-music://play/mix/?id={0}"
    WEB_PLAY_URI = "http://www.mixrad.io/mixes/{0}/"

    id: str
    name: str

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> Mix:
        return cls(id=str(item.get("id", "")), name=str(item.get("name", "")))


CatalogItem = Union[Artist, Product, Mix]


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of results plus the paging information the API returned."""

    items: list[T] = field(default_factory=list)
    start_index: int = 0
    items_per_page: int = 0
    total_results: int = 0

    @classmethod
    def from_json(cls, text: str, parse_item: Callable[[dict[str, Any]], T]) -> Page[T]:
        data = parse_json_object(text)
        paging = data.get("paging") or {}
        items = [parse_item(item) for item in data.get("items", []) if isinstance(item, dict)]
        return cls(
            items=items,
            start_index=int(paging.get("startindex", 0)),
            items_per_page=int(paging.get("itemsperpage", len(items))),
            total_results=int(paging.get("total", len(items))),
        )


def parse_catalog_item(item: dict[str, Any]) -> CatalogItem:
    """Build the right catalog type for an item based on its category."""
    category = _category_of(item)
    if category is Category.ARTIST:
        return Artist.from_json(item)
    if category is Category.MIX:
        return Mix.from_json(item)
    return Product.from_json(item)


def parse_product_page(text: str) -> Page[Product]:
    return Page.from_json(text, Product.from_json)


def parse_catalog_page(text: str) -> Page[CatalogItem]:
    return Page.from_json(text, parse_catalog_item)
