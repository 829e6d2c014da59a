import pytest

from conftest import make_request
from domain.context import build_context, initials_for, lineage_for, numerology_for, zodiac_for
from domain.models import GeneratorKey
from domain.tables import DEFAULT_TABLES, Lineage


@pytest.mark.parametrize(
    "month,day,sign",
    (
        (12, 25, "Capricorn"),
        (6, 21, "Cancer"),
        (12, 21, "Sagittarius"),
        (12, 22, "Capricorn"),
        (1, 19, "Capricorn"),
        (1, 20, "Aquarius"),
        (3, 20, "Pisces"),
        (3, 21, "Aries"),
        (2, 29, "Pisces"),
    ),
)
def test_zodiac_for(month: int, day: int, sign: str) -> None:
    assert zodiac_for(month, day).sign == sign


def test_every_day_has_a_sign() -> None:
    days = {1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30, 7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31}
    for month, last in days.items():
        for day in range(1, last + 1):
            matches = [z for z in DEFAULT_TABLES.zodiac if z.contains(month, day)]
            assert len(matches) == 1, (month, day)


@pytest.mark.parametrize(
    "name,expected",
    (
        ("AB", 3),
        ("ai", 1),  # 1 + 9 = 10
        ("J", 1),
        ("Ada Lovelace", 9),  # 6 + 75 = 81
    ),
)
def test_numerology_for(name: str, expected: int) -> None:
    assert numerology_for(name) == expected


@pytest.mark.parametrize("name", ("Z", "Zz", "Ada", "O'Brien-Smith", "Jean Luc", "x" * 200))
def test_numerology_is_single_digit(name: str) -> None:
    assert 1 <= numerology_for(name) <= 9


def test_numerology_without_letters() -> None:
    assert numerology_for("42 !!") == 9


@pytest.mark.parametrize(
    "surname,lineage",
    (
        ("Rossini", Lineage.italian),
        ("O'Brien", Lineage.irish),
        ("McDonald", Lineage.irish),
        ("Gonzalez", Lineage.spanish),
        ("Yamamoto", Lineage.japanese),
        ("Dubois", Lineage.french),
        ("Larsen", Lineage.nordic),
        ("Smith", Lineage.global_),
    ),
)
def test_lineage_for(surname: str, lineage: Lineage) -> None:
    assert lineage_for(surname) == lineage


def test_initials_for() -> None:
    assert initials_for("ada", "lovelace") == "AL"
    assert initials_for("A", "B") == "AB"
    assert initials_for("", "B") == "B"
    assert initials_for("ßen", "x") == "SX"


def test_build_context_is_pure() -> None:
    first = build_context(make_request(GeneratorKey.heritage))
    second = build_context(make_request(GeneratorKey.heritage))

    assert first == second
    assert first.prng is not second.prng
    assert [first.prng() for _ in range(20)] == [second.prng() for _ in range(20)]


def test_build_context_fields() -> None:
    context = build_context(make_request(GeneratorKey.chronicle, month=1, day=1, year=1900))

    assert context.seed == "chronicle|1|1|1900|Ada|Lovelace"
    assert context.zodiac.sign == "Capricorn"
    assert context.initials == "AL"
    assert context.birth_ordinal == 0
    assert context.day_of_year == 1
    assert context.generator_label == "Birthday Chronicle"


def test_build_context_rolls_days_past_month_end() -> None:
    context = build_context(make_request(GeneratorKey.chronicle, month=2, day=30, year=1985))

    assert context.zodiac.sign == "Pisces"
    assert context.seed == "chronicle|2|30|1985|Ada|Lovelace"
    assert context.day_of_year == 61
