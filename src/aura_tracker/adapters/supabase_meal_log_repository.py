"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from aura_tracker.domain.meals import MealEvaluation, MealLogRecord, MealType
from aura_tracker.domain.nutrition import MealItem, MealTotals, Nutrients
from aura_tracker.services.meals import MealLogRepository

# Nutrients field -> meal_logs column
TOTAL_COLUMNS = {
    "calories": "total_calories",
    "protein_g": "total_protein_g",
    "carbs_g": "total_carbs_g",
    "fats_g": "total_fats_g",
    "fiber_g": "total_fiber_g",
    "magnesium_mg": "total_magnesium_mg",
    "zinc_mg": "total_zinc_mg",
}


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        logged_at: datetime,
        meal_date: date,
        meal_type: MealType,
        items: list[MealItem],
        evaluation: MealEvaluation,
        streak_bonus_xp: int = 0,
    ) -> MealLogRecord:
        """Create a meal log row and return it."""
        totals = evaluation.totals
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "logged_at": logged_at.isoformat(),
                    "meal_date": meal_date.isoformat(),
                    "meal_time": logged_at.strftime("%H:%M:%S"),
                    "meal_type": meal_type.value,
                    "items": [_serialize_item(item) for item in items],
                    **{
                        column: getattr(totals.nutrients, field)
                        for field, column in TOTAL_COLUMNS.items()
                    },
                    "has_hidden_oil": totals.has_hidden_oil,
                    "has_gujju_sugar": totals.has_gujju_sugar,
                    "tadka_oil_ml": totals.tadka_oil_ml,
                    "xp_earned": evaluation.xp.total_xp,
                    "streak_bonus_xp": streak_bonus_xp,
                    "hp_impact": evaluation.hp.total_change,
                    "coach_tip": evaluation.coach_tip,
                    "optimization_score": evaluation.optimization_score,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return parse_meal_log(response.data[0])

    def update_streak_bonus(
        self, meal_id: UUID, streak_bonus_xp: int
    ) -> MealLogRecord:
        """Set the streak bonus recorded on a meal log row."""
        response = (
            self.client.table("meal_logs")
            .update({"streak_bonus_xp": streak_bonus_xp})
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update meal log {meal_id}")
        return parse_meal_log(response.data[0])


def _serialize_item(item: MealItem) -> dict[str, object]:
    return {
        "food_id": str(item.food_id) if item.food_id else None,
        "name": item.name,
        "quantity_g": item.quantity_g,
        **item.nutrients.as_dict(),
    }


def _parse_item(raw: dict[str, object]) -> MealItem:
    food_id = raw.get("food_id")
    return MealItem(
        food_id=UUID(str(food_id)) if food_id else None,
        name=str(raw.get("name", "")),
        quantity_g=float(raw.get("quantity_g", 0.0)),
        nutrients=Nutrients(
            **{
                field: float(raw.get(field) or 0.0)
                for field in TOTAL_COLUMNS
            }
        ),
    )


def parse_meal_log(row: dict[str, object]) -> MealLogRecord:
    """Build a meal log record from a ``meal_logs`` row."""
    logged_at_raw = row.get("logged_at") or row.get("created_at")
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.min
    )
    meal_date_raw = row.get("meal_date")
    meal_date = (
        date.fromisoformat(meal_date_raw)
        if isinstance(meal_date_raw, str) and meal_date_raw
        else logged_at.date()
    )
    nutrients = Nutrients(
        **{
            field: float(row.get(column) or 0.0)
            for field, column in TOTAL_COLUMNS.items()
        }
    )
    return MealLogRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_date=meal_date,
        logged_at=logged_at,
        meal_type=MealType(row.get("meal_type") or MealType.SNACK),
        items=[_parse_item(item) for item in row.get("items") or []],
        totals=MealTotals(
            nutrients=nutrients,
            has_gujju_sugar=bool(row.get("has_gujju_sugar", False)),
            has_hidden_oil=bool(row.get("has_hidden_oil", False)),
            tadka_oil_ml=float(row.get("tadka_oil_ml") or 0.0),
        ),
        xp_earned=int(row.get("xp_earned") or 0),
        hp_impact=int(row.get("hp_impact") or 0),
        coach_tip=str(row.get("coach_tip") or ""),
        optimization_score=int(row.get("optimization_score") or 0),
        streak_bonus_xp=int(row.get("streak_bonus_xp") or 0),
    )
