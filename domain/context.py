import datetime
from dataclasses import dataclass, field

from domain.models import GenerationRequest, GeneratorKey
from domain.prng import PRNG, create_prng
from domain.tables import DEFAULT_TABLES, Lineage, Tables, ZodiacProfile


EPOCH = datetime.date(1900, 1, 1)


@dataclass(frozen=True)
class GenerationContext:
    request: GenerationRequest
    tables: Tables
    zodiac: ZodiacProfile
    numerology: int
    initials: str
    lineage: Lineage
    seed: str
    birth_ordinal: int
    day_of_year: int
    # Each context owns its stream. Excluded from equality, compare draws instead.
    prng: PRNG = field(compare=False, repr=False)

    @property
    def generator_key(self) -> GeneratorKey:
        return self.request.generator_key

    @property
    def generator_label(self) -> str:
        return self.tables.label(self.request.generator_key)


def zodiac_for(month: int, day: int, tables: Tables = DEFAULT_TABLES) -> ZodiacProfile:
    for profile in tables.zodiac:
        if profile.contains(month, day):
            return profile
    return tables.zodiac[0]


def digit_sum(n: int) -> int:
    return sum(int(d) for d in str(n))


def numerology_for(name: str) -> int:
    total = sum(ord(c) - ord("A") + 1 for c in name.upper() if "A" <= c <= "Z")
    if total == 0:
        return 9
    while total > 9:
        total = digit_sum(total)
    return total


def lineage_for(last_name: str, tables: Tables = DEFAULT_TABLES) -> Lineage:
    surname = last_name.strip().lower()
    for lineage, pattern in tables.lineage_rules:
        if pattern.search(surname):
            return lineage
    return tables.default_lineage


def initials_for(first_name: str, last_name: str) -> str:
    # upper() can grow a character, e.g. "ß" to "SS", so trim after it.
    return first_name.strip()[:1].upper()[:1] + last_name.strip()[:1].upper()[:1]


def seed_for(request: GenerationRequest) -> str:
    return "|".join(
        [
            request.generator_key.value,
            str(request.birth_month),
            str(request.birth_day),
            str(request.birth_year),
            request.first_name,
            request.last_name,
        ]
    )


def build_context(
    request: GenerationRequest,
    tables: Tables = DEFAULT_TABLES,
) -> GenerationContext:
    seed = seed_for(request)
    birth = request.birth_date
    return GenerationContext(
        request=request,
        tables=tables,
        zodiac=zodiac_for(request.birth_month, request.birth_day, tables),
        numerology=numerology_for(request.first_name + request.last_name),
        initials=initials_for(request.first_name, request.last_name),
        lineage=lineage_for(request.last_name, tables),
        seed=seed,
        birth_ordinal=(birth - EPOCH).days,
        day_of_year=birth.timetuple().tm_yday,
        prng=create_prng(seed),
    )
