import datetime
from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Any, Mapping, Self

from domain.errors import ValidationError


MIN_BIRTH_YEAR = 1900

INT_PATTERN = re.compile(r"^\s*-?\d+\s*$")


class GeneratorKey(Enum):
    celestial = "celestial"
    numerology = "numerology"
    heritage = "heritage"
    chronicle = "chronicle"
    monogram = "monogram"


def max_birth_year() -> int:
    return datetime.date.today().year


def parse_generator_key(value: Any) -> GeneratorKey:
    if isinstance(value, GeneratorKey):
        return value
    try:
        return GeneratorKey(str(value).strip().lower())
    except ValueError:
        expected = ", ".join(k.value for k in GeneratorKey)
        raise ValidationError(
            f"Unknown generator key {value!r}. Expected one of: {expected}."
        ) from None


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INT_PATTERN.match(value):
        return int(value)
    return None


def strict_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def check_name(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required.")
    return value.strip()


def check_range(value: int | None, low: int, high: int, label: str) -> int:
    if value is None or not low <= value <= high:
        raise ValidationError(
            f"{label} must be a whole number between {low} and {high}."
        )
    return value


@dataclass(frozen=True)
class GenerationRequest:
    generator_key: GeneratorKey
    first_name: str
    last_name: str
    birth_month: int
    birth_day: int
    birth_year: int

    def __post_init__(self) -> None:
        # Frozen, so normalised fields go through object.__setattr__.
        object.__setattr__(self, "generator_key", parse_generator_key(self.generator_key))
        object.__setattr__(self, "first_name", check_name(self.first_name, "First name"))
        object.__setattr__(self, "last_name", check_name(self.last_name, "Last name"))
        check_range(strict_int(self.birth_month), 1, 12, "Birth month")
        check_range(strict_int(self.birth_day), 1, 31, "Birth day")
        check_range(
            strict_int(self.birth_year), MIN_BIRTH_YEAR, max_birth_year(), "Birth year"
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Self:
        """Validate a camelCase JSON payload.

        Checks run in a fixed order so the reported error is always the first
        violated constraint: generator key, names, month, day, then year.
        """
        key = parse_generator_key(payload.get("generatorKey"))
        first_name = check_name(payload.get("firstName"), "First name")
        last_name = check_name(payload.get("lastName"), "Last name")
        month = check_range(parse_int(payload.get("birthMonth")), 1, 12, "Birth month")
        day = check_range(parse_int(payload.get("birthDay")), 1, 31, "Birth day")
        year = check_range(
            parse_int(payload.get("birthYear")),
            MIN_BIRTH_YEAR,
            max_birth_year(),
            "Birth year",
        )
        return cls(
            generator_key=key,
            first_name=first_name,
            last_name=last_name,
            birth_month=month,
            birth_day=day,
            birth_year=year,
        )

    @property
    def birth_date(self) -> datetime.date:
        """The calendar date, rolling days past the month end into the next month.

        February 30 1985 is March 2 1985. Zodiac lookups use the raw month and
        day instead.
        """
        first = datetime.date(self.birth_year, self.birth_month, 1)
        return first + datetime.timedelta(days=self.birth_day - 1)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class RecipeBlueprint:
    drink_name: str
    reason: str
    ingredients: tuple[str, ...]
    instructions: tuple[str, ...]
    compatibility: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "drinkName": self.drink_name,
            "reason": self.reason,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "compatibility": self.compatibility,
        }


@dataclass(frozen=True)
class StoredRecipe:
    drink_id: str
    timestamp: str
    generator_key: GeneratorKey
    generator_label: str
    first_name: str
    last_name: str
    birth_month: int
    birth_day: int
    birth_year: int
    blueprint: RecipeBlueprint
    vote_count: int = 0

    @classmethod
    def create(
        cls,
        request: GenerationRequest,
        blueprint: RecipeBlueprint,
        *,
        drink_id: str,
        timestamp: str,
        generator_label: str,
    ) -> Self:
        return cls(
            drink_id=drink_id,
            timestamp=timestamp,
            generator_key=request.generator_key,
            generator_label=generator_label,
            first_name=request.first_name,
            last_name=request.last_name,
            birth_month=request.birth_month,
            birth_day=request.birth_day,
            birth_year=request.birth_year,
            blueprint=blueprint,
        )

    def __repr__(self) -> str:
        return f"<StoredRecipe(id={self.drink_id}, name={self.blueprint.drink_name})>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "drinkId": self.drink_id,
            "timestamp": self.timestamp,
            "generatorKey": self.generator_key.value,
            "generatorLabel": self.generator_label,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "birthMonth": self.birth_month,
            "birthDay": self.birth_day,
            "birthYear": self.birth_year,
            **self.blueprint.to_dict(),
            "voteCount": self.vote_count,
        }


@dataclass(frozen=True)
class VoteAuditEntry:
    timestamp: str
    drink_id: str
    previous_votes: int
    new_votes: int
    action: str = field(default="upvote")
