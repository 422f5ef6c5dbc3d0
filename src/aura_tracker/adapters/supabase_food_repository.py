"""Supabase repository for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from aura_tracker.domain.nutrition import FoodProfile, Nutrients
from aura_tracker.services.meals import FoodRepository

# Nutrients field -> food_database column
_PER_100G_COLUMNS = {
    "calories": "calories_per_100g",
    "protein_g": "protein_per_100g",
    "carbs_g": "carbs_per_100g",
    "fats_g": "fats_per_100g",
    "fiber_g": "fiber_per_100g",
    "magnesium_mg": "magnesium_per_100g",
    "zinc_mg": "zinc_per_100g",
}


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed food catalog lookups."""

    client: Client

    def get_food(self, food_id: UUID) -> FoodProfile | None:
        """Return a catalog food by id, if present."""
        response = (
            self.client.table("food_database")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])


def _parse_food(row: dict[str, object]) -> FoodProfile:
    per_100g = Nutrients(
        **{
            field: float(row.get(column) or 0.0)
            for field, column in _PER_100G_COLUMNS.items()
        }
    )
    oil_ml = row.get("typical_tadka_oil_ml")
    bowl_size = row.get("bowl_size_g")
    return FoodProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name_english", "")),
        category=row.get("category"),
        per_100g=per_100g,
        is_high_protein=bool(row.get("is_high_protein", False)),
        typical_oil_ml=float(oil_ml) if oil_ml is not None else None,
        serving_size_g=float(bowl_size) if bowl_size is not None else None,
    )
