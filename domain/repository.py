import logging
from typing import Sequence

from domain.errors import NotFoundError
from domain.models import GeneratorKey, RecipeBlueprint, StoredRecipe, VoteAuditEntry
from domain.stores import Cell, RowStore


logger = logging.getLogger(__name__)


DRINKS_TABLE = "GeneratedDrinks"
DRINK_HEADERS = (
    "ID",
    "Timestamp",
    "Generator Key",
    "Generator Label",
    "First Name",
    "Last Name",
    "Birth Month",
    "Birth Day",
    "Birth Year",
    "Reason",
    "Drink Name",
    "Ingredients",
    "Instructions",
    "Compatibility",
    "Votes",
)
VOTES_COLUMN = DRINK_HEADERS.index("Votes")

AUDIT_TABLE = "VoteAudit"
AUDIT_HEADERS = ("Timestamp", "Drink ID", "Previous Votes", "New Votes", "Action")

BULLET = " • "


def to_int(value: str, default: int = 0) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def split_bullets(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split("•") if part.strip())


def recipe_to_row(recipe: StoredRecipe) -> list[Cell]:
    blueprint = recipe.blueprint
    return [
        recipe.drink_id,
        recipe.timestamp,
        recipe.generator_key.value,
        recipe.generator_label,
        recipe.first_name,
        recipe.last_name,
        recipe.birth_month,
        recipe.birth_day,
        recipe.birth_year,
        blueprint.reason,
        blueprint.drink_name,
        BULLET.join(blueprint.ingredients),
        BULLET.join(blueprint.instructions),
        blueprint.compatibility,
        recipe.vote_count,
    ]


def row_to_recipe(row: Sequence[str]) -> StoredRecipe:
    # Spreadsheets drop trailing empty cells.
    cells = list(row) + [""] * (len(DRINK_HEADERS) - len(row))
    return StoredRecipe(
        drink_id=cells[0],
        timestamp=cells[1],
        generator_key=GeneratorKey(cells[2]),
        generator_label=cells[3],
        first_name=cells[4],
        last_name=cells[5],
        birth_month=to_int(cells[6]),
        birth_day=to_int(cells[7]),
        birth_year=to_int(cells[8]),
        blueprint=RecipeBlueprint(
            reason=cells[9],
            drink_name=cells[10],
            ingredients=split_bullets(cells[11]),
            instructions=split_bullets(cells[12]),
            compatibility=cells[13],
        ),
        vote_count=max(0, to_int(cells[VOTES_COLUMN])),
    )


class RecipeRepository:
    """Generated drinks and their vote audit trail, kept in two row tables."""

    def __init__(self, store: RowStore) -> None:
        self.store = store

    async def ensure_schema(self) -> None:
        await self.store.ensure_table(DRINKS_TABLE, DRINK_HEADERS)
        await self.store.ensure_table(AUDIT_TABLE, AUDIT_HEADERS)

    async def append_recipe(self, recipe: StoredRecipe) -> str:
        await self.store.append_row(DRINKS_TABLE, recipe_to_row(recipe))
        return recipe.drink_id

    async def list_recipes(self) -> list[StoredRecipe]:
        recipes: list[StoredRecipe] = []
        for row in await self.store.read_rows(DRINKS_TABLE):
            if not row or not row[0]:
                continue
            try:
                recipes.append(row_to_recipe(row))
            except ValueError:
                logger.warning("Skipping unreadable drink row %s", row[0])
        return recipes

    async def increment_vote(self, drink_id: str) -> int:
        """Add one vote and return the new count.

        This reads the row, then writes it back. Two votes for the same drink
        landing together can both read the old count and one of them is lost.
        """
        rows = await self.store.read_rows(DRINKS_TABLE)
        for index, row in enumerate(rows):
            if row and row[0] == drink_id:
                break
        else:
            raise NotFoundError(f"No drink with id {drink_id}.")

        cells: list[Cell] = list(row) + [""] * (len(DRINK_HEADERS) - len(row))
        new_votes = max(0, to_int(str(cells[VOTES_COLUMN]))) + 1
        cells[VOTES_COLUMN] = new_votes
        await self.store.update_row(DRINKS_TABLE, index, cells)
        return new_votes

    async def append_vote_audit(self, entry: VoteAuditEntry) -> None:
        await self.store.append_row(
            AUDIT_TABLE,
            [
                entry.timestamp,
                entry.drink_id,
                entry.previous_votes,
                entry.new_votes,
                entry.action,
            ],
        )
