"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutritalk.domain.profiles import DailyTargets, MacroRatio, UserProfile
from nutritalk.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "user_id, name, email, weight_kg, height_cm, age, gender, activity_level, "
    "goal, macro_protein, macro_carbs, macro_fat, step_goal, daily_water_ml, "
    "target_calories, target_protein_g, target_carbs_g, target_fat_g"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles, one row per user."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Upsert the profile row."""
        targets = profile.targets
        self.client.table("profiles").upsert(
            {
                "user_id": str(profile.user_id),
                "name": profile.name,
                "email": profile.email,
                "weight_kg": profile.weight_kg,
                "height_cm": profile.height_cm,
                "age": profile.age,
                "gender": profile.gender,
                "activity_level": profile.activity_level,
                "goal": profile.goal,
                "macro_protein": profile.macro_ratio.protein,
                "macro_carbs": profile.macro_ratio.carbs,
                "macro_fat": profile.macro_ratio.fat,
                "step_goal": profile.step_goal,
                "daily_water_ml": profile.daily_water_ml,
                "target_calories": targets.calories if targets else None,
                "target_protein_g": targets.protein_g if targets else None,
                "target_carbs_g": targets.carbs_g if targets else None,
                "target_fat_g": targets.fat_g if targets else None,
            },
            on_conflict="user_id",
        ).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    targets = None
    if row.get("target_calories") is not None:
        targets = DailyTargets(
            calories=int(row["target_calories"]),
            protein_g=int(row.get("target_protein_g") or 0),
            carbs_g=int(row.get("target_carbs_g") or 0),
            fat_g=int(row.get("target_fat_g") or 0),
        )
    defaults = MacroRatio()
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        weight_kg=float(row.get("weight_kg", 70)),
        height_cm=float(row.get("height_cm", 175)),
        age=int(row.get("age", 30)),
        gender=str(row.get("gender", "homme")),
        activity_level=str(row.get("activity_level", "modérée")),
        goal=str(row.get("goal", "maintien")),
        macro_ratio=MacroRatio(
            protein=float(row.get("macro_protein", defaults.protein)),
            carbs=float(row.get("macro_carbs", defaults.carbs)),
            fat=float(row.get("macro_fat", defaults.fat)),
        ),
        step_goal=int(row.get("step_goal", 10000)),
        daily_water_ml=int(row.get("daily_water_ml", 2000)),
        targets=targets,
    )
