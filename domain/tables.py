"""Fixed lookup data shared by the context builder and the generators.

Everything here is built once at import and never mutated. Callers receive a
`Tables` bundle so tests can swap in their own data.
"""

from dataclasses import dataclass
from enum import Enum
import re
from types import MappingProxyType
from typing import Mapping

from domain.models import GeneratorKey


class Lineage(Enum):
    italian = "italian"
    irish = "irish"
    spanish = "spanish"
    japanese = "japanese"
    french = "french"
    nordic = "nordic"
    global_ = "global"


@dataclass(frozen=True)
class ZodiacProfile:
    sign: str
    element: str
    start: tuple[int, int]
    end: tuple[int, int]
    base_spirit: str
    notes: tuple[str, ...]
    garnishes: tuple[str, ...]

    def contains(self, month: int, day: int) -> bool:
        point = (month, day)
        if self.start <= self.end:
            return self.start <= point <= self.end
        # Wraps the new year, e.g. Dec 22 to Jan 19.
        return point >= self.start or point <= self.end


@dataclass(frozen=True)
class HeritageProfile:
    spirit: str
    modifiers: tuple[str, ...]
    homeland: str
    toast: str


@dataclass(frozen=True)
class SeasonProfile:
    name: str
    spirit: str
    fruits: tuple[str, ...]
    syrup: str


@dataclass(frozen=True)
class Tables:
    zodiac: tuple[ZodiacProfile, ...]
    lineage_rules: tuple[tuple[Lineage, re.Pattern[str]], ...]
    default_lineage: Lineage
    heritage: Mapping[Lineage, HeritageProfile]
    element_companions: Mapping[str, tuple[str, ...]]
    numerology_spirits: Mapping[int, str]
    numerology_default_spirit: str
    numerology_titles: Mapping[int, str]
    seasons: Mapping[int, SeasonProfile]
    decades: tuple[str, ...]
    letter_flavours: tuple[str, ...]
    bitters: tuple[str, ...]
    glassware: tuple[str, ...]
    techniques: tuple[str, ...]
    generator_labels: Mapping[GeneratorKey, str]

    def label(self, key: GeneratorKey) -> str:
        return self.generator_labels[key]


ZODIAC = (
    ZodiacProfile(
        "Aries", "Fire", (3, 21), (4, 19), "Spiced Rum",
        ("cinnamon", "chili", "blood orange", "ginger"),
        ("flamed orange peel", "cinnamon stick", "chili thread"),
    ),
    ZodiacProfile(
        "Taurus", "Earth", (4, 20), (5, 20), "Bourbon",
        ("honey", "vanilla", "pear", "cacao"),
        ("pear fan", "honeycomb shard", "grated nutmeg"),
    ),
    ZodiacProfile(
        "Gemini", "Air", (5, 21), (6, 20), "Gin",
        ("lemon verbena", "elderflower", "cucumber", "mint"),
        ("cucumber ribbon", "mint sprig", "lemon twist"),
    ),
    ZodiacProfile(
        "Cancer", "Water", (6, 21), (7, 22), "Vodka",
        ("white peach", "coconut", "jasmine", "lychee"),
        ("lychee", "jasmine blossom", "edible pearl dust"),
    ),
    ZodiacProfile(
        "Leo", "Fire", (7, 23), (8, 22), "Reposado Tequila",
        ("saffron", "mango", "orange blossom", "agave"),
        ("dehydrated orange wheel", "gold sugar rim", "mango spear"),
    ),
    ZodiacProfile(
        "Virgo", "Earth", (8, 23), (9, 22), "Rye Whiskey",
        ("green apple", "sage", "chamomile", "walnut"),
        ("sage leaf", "apple fan", "lemon coin"),
    ),
    ZodiacProfile(
        "Libra", "Air", (9, 23), (10, 22), "Cognac",
        ("rose", "raspberry", "violet", "fig"),
        ("rose petal", "raspberry skewer", "fig slice"),
    ),
    ZodiacProfile(
        "Scorpio", "Water", (10, 23), (11, 21), "Mezcal",
        ("black cherry", "smoked salt", "espresso", "blackberry"),
        ("smoked salt rim", "brandied cherry", "blackberry"),
    ),
    ZodiacProfile(
        "Sagittarius", "Fire", (11, 22), (12, 21), "Dark Rum",
        ("pineapple", "clove", "tamarind", "allspice"),
        ("pineapple leaf", "star anise", "clove-studded lime"),
    ),
    ZodiacProfile(
        "Capricorn", "Earth", (12, 22), (1, 19), "Scotch Whisky",
        ("maple", "black tea", "pine", "dark chocolate"),
        ("rosemary sprig", "orange peel", "cacao nib dust"),
    ),
    ZodiacProfile(
        "Aquarius", "Air", (1, 20), (2, 18), "Blanco Tequila",
        ("yuzu", "butterfly pea", "grapefruit", "lavender"),
        ("grapefruit twist", "lavender sprig", "yuzu wheel"),
    ),
    ZodiacProfile(
        "Pisces", "Water", (2, 19), (3, 20), "Pisco",
        ("sea salt", "melon", "lime leaf", "lemongrass"),
        ("lime leaf", "melon ball", "sea salt flakes"),
    ),
)


# Order matters, the first matching rule wins.
LINEAGE_RULES = (
    (Lineage.italian, re.compile(r"(?:ini|ino|elli|etti|ucci|acci|ello|otti|iano|esi)$")),
    (Lineage.irish, re.compile(r"^(?:o'|o’|mc|mac)")),
    (Lineage.spanish, re.compile(r"(?:ez|az|iz|oz)$")),
    (Lineage.japanese, re.compile(r"(?:moto|mura|yama|kawa|shima|hara|hashi|saki|zawa|uchi)$")),
    (Lineage.french, re.compile(r"^(?:le |la |du |des |de |d')|(?:eau|eaux|ault|ier|oux|ois|ette)$")),
    (Lineage.nordic, re.compile(r"(?:sen|sson|son|dottir|dóttir|berg|strom|ström|lund|qvist|quist)$")),
)


HERITAGE = MappingProxyType(
    {
        Lineage.italian: HeritageProfile(
            "Amaro Nonino",
            ("sweet vermouth", "Campari", "limoncello", "espresso"),
            "the Italian coast",
            "Salute",
        ),
        Lineage.irish: HeritageProfile(
            "Irish Whiskey",
            ("Irish cream", "stout reduction", "honey syrup", "Demerara syrup"),
            "the Irish hills",
            "Sláinte",
        ),
        Lineage.spanish: HeritageProfile(
            "Brandy de Jerez",
            ("amontillado sherry", "Licor 43", "saffron syrup", "orange bitters"),
            "the Andalusian bodegas",
            "Salud",
        ),
        Lineage.japanese: HeritageProfile(
            "Japanese Whisky",
            ("yuzu juice", "matcha syrup", "junmai sake", "umeshu"),
            "the Kyoto tea houses",
            "Kanpai",
        ),
        Lineage.french: HeritageProfile(
            "Calvados",
            ("Cointreau", "Lillet Blanc", "green Chartreuse", "crème de cassis"),
            "the Normandy orchards",
            "Santé",
        ),
        Lineage.nordic: HeritageProfile(
            "Aquavit",
            ("lingonberry syrup", "cardamom syrup", "dill tincture", "cloudberry liqueur"),
            "the Nordic fjords",
            "Skål",
        ),
        Lineage.global_: HeritageProfile(
            "London Dry Gin",
            ("elderflower liqueur", "passion fruit syrup", "ginger beer", "Angostura bitters"),
            "every harbour bar in the world",
            "Cheers",
        ),
    }
)


ELEMENT_COMPANIONS = MappingProxyType(
    {
        "Fire": ("Aries", "Leo", "Sagittarius", "Gemini", "Libra", "Aquarius"),
        "Air": ("Gemini", "Libra", "Aquarius", "Aries", "Leo", "Sagittarius"),
        "Earth": ("Taurus", "Virgo", "Capricorn", "Cancer", "Scorpio", "Pisces"),
        "Water": ("Cancer", "Scorpio", "Pisces", "Taurus", "Virgo", "Capricorn"),
    }
)


# 8 and 9 are deliberately absent and use the default spirit.
NUMEROLOGY_SPIRITS = MappingProxyType(
    {
        1: "Overproof Rum",
        2: "Elderflower Gin",
        3: "Blanco Tequila",
        4: "Rye Whiskey",
        5: "Mezcal",
        6: "Cognac",
        7: "Absinthe",
    }
)

NUMEROLOGY_DEFAULT_SPIRIT = "Aged Rum"

NUMEROLOGY_TITLES = MappingProxyType(
    {
        1: "the Trailblazer",
        2: "the Diplomat",
        3: "the Storyteller",
        4: "the Builder",
        5: "the Adventurer",
        6: "the Nurturer",
        7: "the Mystic",
        8: "the Magnate",
        9: "the Sage",
    }
)


_WINTER = SeasonProfile("winter", "Scotch Whisky", ("blood orange", "pomegranate", "cranberry"), "spiced demerara syrup")
_SPRING = SeasonProfile("spring", "Gin", ("rhubarb", "strawberry", "lemon"), "elderflower syrup")
_SUMMER = SeasonProfile("summer", "Blanco Tequila", ("watermelon", "lime", "peach"), "agave nectar")
_AUTUMN = SeasonProfile("autumn", "Apple Brandy", ("apple", "pear", "fig"), "maple syrup")

SEASONS = MappingProxyType(
    {
        1: _WINTER, 2: _WINTER, 3: _SPRING, 4: _SPRING, 5: _SPRING, 6: _SUMMER,
        7: _SUMMER, 8: _SUMMER, 9: _AUTUMN, 10: _AUTUMN, 11: _AUTUMN, 12: _WINTER,
    }
)


# Indexed by (birth year - 1900) // 10, clamped to the last entry.
DECADES = (
    "Prohibition Flip",
    "Jazz Age Sour",
    "Speakeasy Fizz",
    "Tiki Punch",
    "Atomic Highball",
    "Mad Men Martini",
    "Disco Daiquiri",
    "Neon Cosmopolitan",
    "Millennium Mojito",
    "Craft Revival Old Fashioned",
    "Low-ABV Spritz",
    "Zero-Waste Smash",
    "Future Classic",
)


# One entry per letter A to Z.
LETTER_FLAVOURS = (
    "apricot", "basil", "cardamom", "damson", "elderflower", "fennel",
    "grapefruit", "hibiscus", "ice wine", "jasmine", "kumquat", "lavender",
    "mango", "nectarine", "orgeat", "passion fruit", "quince", "raspberry",
    "sage", "tamarind", "ube", "vanilla", "watermelon", "xocolatl",
    "yuzu", "za'atar",
)


BITTERS = (
    "Angostura bitters",
    "orange bitters",
    "Peychaud's bitters",
    "chocolate bitters",
    "celery bitters",
    "grapefruit bitters",
)

GLASSWARE = (
    "a chilled coupe",
    "a rocks glass over one large cube",
    "a Collins glass over crushed ice",
    "a Nick and Nora glass",
    "a copper mug",
)

TECHNIQUES = (
    "Shake hard with ice for twelve seconds",
    "Stir over ice until the tin frosts",
    "Dry shake, then shake again with ice",
    "Build over ice and give a gentle lift with a bar spoon",
)


GENERATOR_LABELS = MappingProxyType(
    {
        GeneratorKey.celestial: "Celestial Alignment",
        GeneratorKey.numerology: "Numerology Elixir",
        GeneratorKey.heritage: "Ancestral Heritage",
        GeneratorKey.chronicle: "Birthday Chronicle",
        GeneratorKey.monogram: "Monogram Muse",
    }
)


DEFAULT_TABLES = Tables(
    zodiac=ZODIAC,
    lineage_rules=LINEAGE_RULES,
    default_lineage=Lineage.global_,
    heritage=HERITAGE,
    element_companions=ELEMENT_COMPANIONS,
    numerology_spirits=NUMEROLOGY_SPIRITS,
    numerology_default_spirit=NUMEROLOGY_DEFAULT_SPIRIT,
    numerology_titles=NUMEROLOGY_TITLES,
    seasons=SEASONS,
    decades=DECADES,
    letter_flavours=LETTER_FLAVOURS,
    bitters=BITTERS,
    glassware=GLASSWARE,
    techniques=TECHNIQUES,
    generator_labels=GENERATOR_LABELS,
)
