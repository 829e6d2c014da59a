"""The five deterministic recipe generators.

Each generator reads a `GenerationContext` and returns a `RecipeBlueprint`.
Every generator draws from the context PRNG a fixed number of times in a fixed
order, so the same request always produces the same drink.
"""

from typing import assert_never

from domain.context import GenerationContext, digit_sum
from domain.models import GeneratorKey, RecipeBlueprint
from domain.prng import pick_one, pick_unique_subset


ACIDS = {
    "Fire": "0.75 oz fresh lime juice",
    "Air": "0.75 oz fresh lime juice",
    "Earth": "0.5 oz fresh lemon juice",
    "Water": "0.5 oz fresh lemon juice",
}

CELESTIAL_SUFFIXES = ("Ember", "Meridian", "Eclipse", "Comet")
NUMEROLOGY_SUFFIXES = ("Elixir", "Tonic", "Draught")
HERITAGE_SUFFIXES = ("Heirloom", "Homecoming", "Reserve")
MONOGRAM_SUFFIXES = ("Signature", "Cipher", "Seal", "Flourish")


def oz(amount: float) -> str:
    return f"{amount:g} oz"


def dashes(n: int) -> str:
    return f"{n} dash" if n == 1 else f"{n} dashes"


def letter_index(letter: str, size: int) -> int:
    if not letter:
        return 0
    if "A" <= letter <= "Z":
        return (ord(letter) - ord("A")) % size
    return ord(letter) % size


def celestial(context: GenerationContext) -> RecipeBlueprint:
    request, zodiac, tables = context.request, context.zodiac, context.tables
    prng = context.prng

    notes = pick_unique_subset(prng, zodiac.notes, 2)
    garnish = pick_one(prng, zodiac.garnishes)
    bitters = pick_one(prng, tables.bitters)
    glass = pick_one(prng, tables.glassware)
    technique = pick_one(prng, tables.techniques)

    base = 1.5 + (request.birth_day % 4) * 0.25
    suffix = CELESTIAL_SUFFIXES[request.birth_year % len(CELESTIAL_SUFFIXES)]
    companions = [
        sign for sign in tables.element_companions.get(zodiac.element, ())
        if sign != zodiac.sign
    ][:3]

    return RecipeBlueprint(
        drink_name=f"{zodiac.sign} {suffix}",
        reason=(
            f"Born under {zodiac.sign}, a {zodiac.element.lower()} sign, "
            f"{request.first_name} carries {notes[0]} and {notes[1]} in their chart. "
            f"{zodiac.base_spirit} anchors the glass the way {zodiac.element} "
            f"anchors {zodiac.sign}, and a {garnish} seals the alignment."
        ),
        ingredients=(
            f"{oz(base)} {zodiac.base_spirit}",
            f"0.75 oz {notes[0]} syrup",
            f"0.5 oz {notes[1]} cordial",
            ACIDS.get(zodiac.element, "0.5 oz fresh lemon juice"),
            f"2 dashes {bitters}",
        ),
        instructions=(
            f"{technique} with the {zodiac.base_spirit}, syrup, cordial and juice.",
            f"Strain into {glass} and garnish with a {garnish}.",
        ),
        compatibility=f"Aligned with {', '.join(companions)}",
    )


def numerology(context: GenerationContext) -> RecipeBlueprint:
    request, tables, prng = context.request, context.tables, context.prng
    n = context.numerology

    flavours = pick_unique_subset(prng, tables.letter_flavours, 2)
    bitters = pick_one(prng, tables.bitters)
    glass = pick_one(prng, tables.glassware)

    spirit = tables.numerology_spirits.get(n, tables.numerology_default_spirit)
    title = tables.numerology_titles.get(n, "the Wanderer")
    pour = min(2.5, 1.25 + (n % 5) * 0.25)
    suffix = NUMEROLOGY_SUFFIXES[n % len(NUMEROLOGY_SUFFIXES)]

    return RecipeBlueprint(
        drink_name=f"The {title.removeprefix('the ')}'s {suffix} No. {n}",
        reason=(
            f"The letters of {request.full_name} reduce to {n}, the number of "
            f"{title}. {spirit} answers that vibration, while {flavours[0]} and "
            f"{flavours[1]} trace the path that led there."
        ),
        ingredients=(
            f"{oz(pour)} {spirit}",
            f"0.75 oz {flavours[0]} syrup",
            f"0.5 oz {flavours[1]} liqueur",
            "0.75 oz fresh lemon juice",
            f"{dashes(n % 3 + 1)} {bitters}",
        ),
        instructions=(
            f"Shake everything hard with ice for {n + 8} counts.",
            f"Double strain into {glass}.",
        ),
        compatibility=(
            f"Resonates with life path numbers {n % 9 + 1} and {(n + 3) % 9 + 1}"
        ),
    )


def heritage(context: GenerationContext) -> RecipeBlueprint:
    request, tables, prng = context.request, context.tables, context.prng
    profile = tables.heritage.get(context.lineage) or tables.heritage[
        tables.default_lineage
    ]

    modifiers = pick_unique_subset(prng, profile.modifiers, 2)
    garnish = pick_one(prng, context.zodiac.garnishes)
    glass = pick_one(prng, tables.glassware)
    technique = pick_one(prng, tables.techniques)

    surname = request.last_name
    pour = 1.5 + (len(surname) % 3) * 0.25
    suffix = HERITAGE_SUFFIXES[len(surname) % len(HERITAGE_SUFFIXES)]

    return RecipeBlueprint(
        drink_name=f"The {surname.title()} {suffix}",
        reason=(
            f"The name {surname} points toward {profile.homeland}. "
            f"{profile.spirit} is the pour raised there with a cry of "
            f"{profile.toast}, and {modifiers[0]} with {modifiers[1]} make room "
            f"for {request.first_name}'s own chapter of the story."
        ),
        ingredients=(
            f"{oz(pour)} {profile.spirit}",
            f"0.75 oz {modifiers[0]}",
            f"0.5 oz {modifiers[1]}",
            f"Garnish: {garnish}",
        ),
        instructions=(
            f"Chill {glass}.",
            f"{technique}.",
            f"Strain, garnish with the {garnish} and raise a glass: {profile.toast}!",
        ),
        compatibility=f"Best shared with anyone who answers {profile.toast}",
    )


def chronicle(context: GenerationContext) -> RecipeBlueprint:
    request, tables, prng = context.request, context.tables, context.prng
    season = tables.seasons[request.birth_month]
    decade_index = min(max((request.birth_year - 1900) // 10, 0), len(tables.decades) - 1)
    style = tables.decades[decade_index]

    fruit = pick_one(prng, season.fruits)
    bitters = pick_one(prng, tables.bitters)
    glass = pick_one(prng, tables.glassware)
    technique = pick_one(prng, tables.techniques)

    pour = 1.5 + (context.day_of_year % 3) * 0.25
    sweet = 0.5 + (context.birth_ordinal % 2) * 0.25
    digits = digit_sum(
        int(f"{request.birth_month}{request.birth_day}{request.birth_year}")
    )

    return RecipeBlueprint(
        drink_name=f"{season.name.title()} {style}",
        reason=(
            f"{request.first_name} arrived on day {context.day_of_year} of "
            f"{request.birth_year}, {context.birth_ordinal:,} days after the first "
            f"of January 1900. A {season.name} birthday calls for {season.spirit} "
            f"and ripe {fruit}, shaped like the {style} of that era."
        ),
        ingredients=(
            f"{oz(pour)} {season.spirit}",
            f"{oz(sweet)} {season.syrup}",
            f"1 oz {fruit} purée",
            "0.75 oz fresh lime juice",
            f"{dashes(digits % 3 + 1)} {bitters}",
        ),
        instructions=(
            f"Muddle the {fruit} purée with the {season.syrup} in a shaker.",
            f"{technique}, then strain into {glass}.",
            f"Toast day {context.birth_ordinal:,}.",
        ),
        compatibility=(
            f"Pairs with fellow {season.name} birthdays and anyone born in the "
            f"{request.birth_year // 10 * 10}s"
        ),
    )


def monogram(context: GenerationContext) -> RecipeBlueprint:
    request, tables, prng = context.request, context.tables, context.prng
    initials = context.initials
    first_initial, last_initial = initials[:1], initials[1:2]

    flavours = tables.letter_flavours
    a = letter_index(first_initial, len(flavours))
    b = letter_index(last_initial, len(flavours))
    if b == a:
        b = (b + 1) % len(flavours)

    heritage_spirit = (
        tables.heritage.get(context.lineage) or tables.heritage[tables.default_lineage]
    ).spirit
    spirits = (
        context.zodiac.base_spirit,
        heritage_spirit,
        tables.numerology_spirits.get(context.numerology, tables.numerology_default_spirit),
    )

    spirit = pick_one(prng, spirits)
    bitters = pick_one(prng, tables.bitters)
    glass = pick_one(prng, tables.glassware)
    technique = pick_one(prng, tables.techniques)

    first_len, last_len = len(request.first_name), len(request.last_name)
    letters = first_len + last_len
    suffix = MONOGRAM_SUFFIXES[letters % len(MONOGRAM_SUFFIXES)]

    return RecipeBlueprint(
        drink_name=f"The {initials} {suffix}",
        reason=(
            f"{request.full_name} signs as {initials}. {first_initial} lends "
            f"{flavours[a]}, {last_initial} lends {flavours[b]}, and the "
            f"{letters} letters of the full name set the measures poured over "
            f"{spirit}."
        ),
        ingredients=(
            f"2 oz {spirit}",
            f"{oz(0.5 + (first_len % 3) * 0.25)} {flavours[a]} syrup",
            f"{oz(0.25 + (last_len % 2) * 0.25)} {flavours[b]} liqueur",
            "0.75 oz fresh lemon juice",
            f"1 dash {bitters}",
        ),
        instructions=(
            f"{technique}.",
            f"Strain into {glass} and trace {initials} across the foam with bitters.",
        ),
        compatibility=(
            f"Kindred with anyone whose initials share {first_initial} or {last_initial}"
        ),
    )


def generate_blueprint(context: GenerationContext) -> RecipeBlueprint:
    match context.generator_key:
        case GeneratorKey.celestial:
            return celestial(context)
        case GeneratorKey.numerology:
            return numerology(context)
        case GeneratorKey.heritage:
            return heritage(context)
        case GeneratorKey.chronicle:
            return chronicle(context)
        case GeneratorKey.monogram:
            return monogram(context)
        case _ as unreachable:
            assert_never(unreachable)
