"""
Drink catalog: name, serving volume (mL), ABV, category and display glyph.
Built-in list of common bar drinks; an external JSON catalog can replace it.
Records from outside are validated here so bad entries never reach the BAC math.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from drinkmate import similarity

logger = logging.getLogger(__name__)

BEER_WORDS = ("beer", "ale", "lager", "stout")
WINE_WORDS = ("wine", "sangria", "prosecco", "champagne")
SPIRIT_WORDS = ("vodka", "gin", "rum", "tequila", "whiskey", "bourbon")
COCKTAIL_WORDS = ("martini", "cocktail", "mojito", "margarita")


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    volume_ml: float
    abv: float  # e.g. 0.05 for 5%
    category: str  # Beer, Wine, Shot, Cocktail
    glyph: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "volume_ml": self.volume_ml,
            "abv": round(self.abv * 100, 1),
            "category": self.category,
            "glyph": self.glyph,
        }


def _has_any(name: str, words: Sequence[str]) -> bool:
    lowered = name.lower()
    return any(w in lowered for w in words)


def glyph_for_name(name: str) -> str:
    if _has_any(name, BEER_WORDS):
        return "🍺"
    if _has_any(name, WINE_WORDS):
        return "🍷"
    if _has_any(name, SPIRIT_WORDS):
        return "🥃"
    if _has_any(name, COCKTAIL_WORDS):
        return "🍸"
    if _has_any(name, ("shot",)):
        return "🥃"
    return "🍹"


def category_for_name(name: str) -> str:
    if _has_any(name, BEER_WORDS):
        return "Beer"
    if _has_any(name, WINE_WORDS):
        return "Wine"
    if _has_any(name, ("shot",)):
        return "Shot"
    return "Cocktail"


def make_entry(name: str, volume_ml: float, alcohol_percentage: float = 0.0) -> CatalogEntry:
    return CatalogEntry(
        name=name,
        volume_ml=float(volume_ml),
        abv=float(alcohol_percentage) / 100.0,
        category=category_for_name(name),
        glyph=glyph_for_name(name),
    )


_e = make_entry

# Typical bar servings (approximate; brands vary). Volumes in mL, ABV in percent.
CATALOG: List[CatalogEntry] = sorted(
    [
        # Beer
        _e("Lager", 330, 5.0),
        _e("Pale Ale", 330, 5.0),
        _e("India Pale Ale", 330, 6.5),
        _e("Stout", 440, 4.2),
        _e("Light Beer", 330, 4.2),
        _e("Craft Beer Pint", 568, 5.5),
        # Wine
        _e("Red Wine", 150, 13.0),
        _e("White Wine", 150, 12.0),
        _e("Rosé Wine", 150, 12.0),
        _e("Prosecco", 125, 11.0),
        _e("Champagne", 125, 12.0),
        _e("Sangria", 200, 9.0),
        # Spirits (single 44 mL pour)
        _e("Vodka", 44, 40.0),
        _e("Gin", 44, 40.0),
        _e("Rum", 44, 40.0),
        _e("Tequila", 44, 40.0),
        _e("Whiskey", 44, 40.0),
        _e("Bourbon", 44, 45.0),
        _e("Jägermeister Shot", 30, 35.0),
        _e("Sambuca Shot", 30, 38.0),
        # Cocktails (approximate per drink)
        _e("Martini", 90, 30.0),
        _e("Margarita", 150, 15.0),
        _e("Mojito", 250, 10.0),
        _e("Vodka Red Bull", 250, 7.0),
        _e("Cosmopolitan", 120, 20.0),
        _e("Long Island Iced Tea", 250, 20.0),
        _e("Piña Colada", 250, 10.0),
        _e("Aperol Spritz", 200, 8.0),
        _e("Hard Seltzer", 330, 5.0),
        _e("Cider", 500, 4.5),
        _e("Soft Drink", 330, 0.0),
    ],
    key=lambda e: e.name,
)


def _positive_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def parse_entries(records: Iterable[Any]) -> List[CatalogEntry]:
    """Turn raw ``{name, volume, alcoholPercentage}`` records into entries, sorted by name.

    Records without a name or with a missing/non-positive volume are skipped.
    A missing alcohol percentage means 0.
    """
    out: List[CatalogEntry] = []
    for raw in records:
        if not isinstance(raw, dict):
            logger.warning("Skipping catalog record that is not an object: %r", raw)
            continue
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.warning("Skipping catalog record without a name: %r", raw)
            continue
        volume = _positive_number(raw.get("volume"))
        if volume is None:
            logger.warning("Skipping catalog record %r: volume must be a positive number", name)
            continue
        pct = raw.get("alcoholPercentage")
        if isinstance(pct, bool) or not isinstance(pct, (int, float)):
            pct = 0.0
        pct = max(0.0, min(100.0, float(pct)))
        out.append(make_entry(name.strip(), volume, pct))
    return sorted(out, key=lambda e: e.name)


def load_catalog(path: str) -> List[CatalogEntry]:
    """Load a ``{"drinks": [...]}`` JSON catalog file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    records = data.get("drinks", []) if isinstance(data, dict) else []
    entries = parse_entries(records)
    logger.info("Loaded %d drinks from %s", len(entries), path)
    return entries


def get_entry(name: str, entries: Optional[Sequence[CatalogEntry]] = None) -> Optional[CatalogEntry]:
    wanted = name.strip().lower()
    for e in CATALOG if entries is None else entries:
        if e.name.lower() == wanted:
            return e
    return None


def search(
    query: str,
    entries: Optional[Sequence[CatalogEntry]] = None,
    threshold: float = similarity.DEFAULT_THRESHOLD,
) -> List[CatalogEntry]:
    """Catalog entries matching a partial or misspelled name, best first."""
    pool = CATALOG if entries is None else entries
    return similarity.rank(query.strip(), pool, lambda e: e.name, threshold=threshold)


def list_by_category(entries: Optional[Sequence[CatalogEntry]] = None) -> Dict[str, List[dict]]:
    """Group catalog by category for UI."""
    out: Dict[str, List[dict]] = {}
    for e in CATALOG if entries is None else entries:
        out.setdefault(e.category, []).append(e.to_dict())
    return out


def list_all_flat(entries: Optional[Sequence[CatalogEntry]] = None) -> List[dict]:
    return [e.to_dict() for e in (CATALOG if entries is None else entries)]
