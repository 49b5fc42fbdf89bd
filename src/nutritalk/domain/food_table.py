"""Built-in food table used by the nutrition assistant."""

from nutritalk.domain.foods import FoodReference

FOOD_REFERENCES: tuple[FoodReference, ...] = (
    FoodReference(
        name="Pâtes cuites",
        calories=131,
        protein_g=5,
        carbs_g=25,
        fat_g=1.1,
        category="Féculents",
        keywords=("pâtes", "pasta", "spaghetti", "tagliatelle"),
    ),
    FoodReference(
        name="Riz blanc cuit",
        calories=130,
        protein_g=2.7,
        carbs_g=28,
        fat_g=0.3,
        category="Féculents",
        keywords=("riz", "rice"),
    ),
    FoodReference(
        name="Blanc de poulet",
        calories=165,
        protein_g=31,
        carbs_g=0,
        fat_g=3.6,
        category="Protéines",
        keywords=("poulet", "chicken"),
    ),
    FoodReference(
        name="Œufs",
        calories=155,
        protein_g=13,
        carbs_g=1.1,
        fat_g=11,
        category="Protéines",
        keywords=("œuf", "oeuf", "egg"),
    ),
    FoodReference(
        name="Avocat",
        calories=160,
        protein_g=2,
        carbs_g=9,
        fat_g=15,
        category="Fruits",
        keywords=("avocat", "avocado"),
    ),
    FoodReference(
        name="Pain complet",
        calories=247,
        protein_g=13,
        carbs_g=41,
        fat_g=4.2,
        category="Féculents",
        keywords=("pain", "bread"),
    ),
    FoodReference(
        name="Tomates",
        calories=18,
        protein_g=0.9,
        carbs_g=3.9,
        fat_g=0.2,
        category="Légumes",
        keywords=("tomate", "tomato"),
    ),
    FoodReference(
        name="Salade verte",
        calories=15,
        protein_g=1.4,
        carbs_g=2.9,
        fat_g=0.2,
        category="Légumes",
        keywords=("salade", "salad"),
    ),
    FoodReference(
        name="Banane",
        calories=89,
        protein_g=1.1,
        carbs_g=23,
        fat_g=0.3,
        category="Fruits",
        keywords=("banane", "banana"),
        fiber_g=2.6,
        vitamin_c_mg=15,
    ),
    FoodReference(
        name="Kiwi jaune",
        calories=60,
        protein_g=1.1,
        carbs_g=15,
        fat_g=0.5,
        category="Fruits",
        keywords=("kiwi jaune", "kiwi gold", "kiwi", "sungold"),
        fiber_g=2,
        vitamin_c_mg=140,
    ),
    FoodReference(
        name="Pomme",
        calories=52,
        protein_g=0.3,
        carbs_g=14,
        fat_g=0.2,
        category="Fruits",
        keywords=("pomme", "apple"),
        fiber_g=2.4,
        vitamin_c_mg=7,
    ),
    FoodReference(
        name="Yaourt nature 0%",
        calories=56,
        protein_g=10,
        carbs_g=4,
        fat_g=0.1,
        category="Produits laitiers",
        keywords=("yaourt", "yogurt"),
    ),
    FoodReference(
        name="Fromage",
        calories=280,
        protein_g=22,
        carbs_g=2.2,
        fat_g=22,
        category="Produits laitiers",
        keywords=("fromage", "cheese"),
    ),
    FoodReference(
        name="Bœuf haché 5%",
        calories=137,
        protein_g=20,
        carbs_g=0,
        fat_g=5,
        category="Protéines",
        keywords=("bœuf", "boeuf", "beef"),
    ),
    FoodReference(
        name="Saumon",
        calories=208,
        protein_g=22,
        carbs_g=0,
        fat_g=13,
        category="Protéines",
        keywords=("saumon", "salmon"),
    ),
    FoodReference(
        name="Brocolis",
        calories=34,
        protein_g=2.8,
        carbs_g=7,
        fat_g=0.4,
        category="Légumes",
        keywords=("brocoli", "broccoli"),
    ),
)
