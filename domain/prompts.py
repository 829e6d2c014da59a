from domain.context import GenerationContext


PREAMBLE = """
You are a world-class, imaginative mixologist for the Mythic Mixology Lab.
Every cocktail you create is a personal reading of the guest in front of you,
drawn from their birth date, their name and the ritual they chose."""

INGREDIENTS_GENERAL = """
Use between three and six ingredients. Put the quantity inside each ingredient
line, in ounces, dashes or pieces. Keep to two or three short instructions."""

FORMAT = """
Respond with a single JSON object and nothing else. Use exactly these keys:
"drinkName" (string), "reason" (string, one paragraph explaining why the drink
suits the guest), "ingredients" (array of strings), "instructions" (array of
strings), "compatibility" (string, who the guest should share it with)."""

CREATE_DRINK_PROMPT = """{preamble}
{ingredients_general}
{format}"""


USER_PROMPT = """Ritual: {label}
Guest: {first_name} {last_name}
Born: {birth_date}
Zodiac sign: {sign} ({element})
Zodiac base spirit: {spirit}
Zodiac accent notes: {notes}
Zodiac garnishes: {garnishes}
Numerology number: {numerology}
Initials: {initials}
Surname lineage: {lineage}
Seed: {seed}

Create the drink for this guest."""


class CreateDrinkPrompt:
    def __init__(
        self,
        preamble: str | None = None,
        ingredients_general: str | None = None,
        format: str | None = None,
    ) -> None:
        self.preamble = PREAMBLE if preamble is None else preamble
        self.ingredients_general = (
            INGREDIENTS_GENERAL if ingredients_general is None else ingredients_general
        )
        self.format = FORMAT if format is None else format

    def __str__(self) -> str:
        return CREATE_DRINK_PROMPT.format(
            preamble=self.preamble,
            ingredients_general=self.ingredients_general,
            format=self.format,
        ).strip()


def build_user_prompt(context: GenerationContext) -> str:
    request, zodiac = context.request, context.zodiac
    return USER_PROMPT.format(
        label=context.generator_label,
        first_name=request.first_name,
        last_name=request.last_name,
        birth_date=f"{request.birth_year}-{request.birth_month:02d}-{request.birth_day:02d}",
        sign=zodiac.sign,
        element=zodiac.element,
        spirit=zodiac.base_spirit,
        notes=", ".join(zodiac.notes),
        garnishes=", ".join(zodiac.garnishes),
        numerology=context.numerology,
        initials=context.initials,
        lineage=context.lineage.value,
        seed=context.seed,
    )
