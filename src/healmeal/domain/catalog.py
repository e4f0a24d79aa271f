"""Bundled meal catalog and demo restaurants."""

from healmeal.domain.meals import Meal, MealSource, MealType, Restaurant

CATALOG_RESTAURANTS: tuple[Restaurant, ...] = (
    Restaurant(
        id="r1",
        name="Healing Kitchen",
        address="123 Wellness Ave, Healthyville",
        distance_km=1.2,
        rating=4.8,
        delivery_time_minutes=25,
    ),
    Restaurant(
        id="r2",
        name="Nourish Cafe",
        address="456 Nutrition Blvd, Fitnesstown",
        distance_km=0.8,
        rating=4.6,
        delivery_time_minutes=20,
    ),
    Restaurant(
        id="r3",
        name="Vitality Foods",
        address="789 Energy St, Activeville",
        distance_km=1.5,
        rating=4.7,
        delivery_time_minutes=30,
    ),
)

# Assigned round-robin to recipe API results.
PARTNER_RESTAURANTS: tuple[Restaurant, ...] = (
    Restaurant(
        id="api-r1",
        name="Health Haven Restaurant",
        address="123 Nutrition St, Wellness City",
        distance_km=0.9,
        rating=4.7,
        delivery_time_minutes=25,
    ),
    Restaurant(
        id="api-r2",
        name="Balanced Bites Bistro",
        address="456 Vitamin Ave, Fitness Valley",
        distance_km=1.3,
        rating=4.5,
        delivery_time_minutes=30,
    ),
    Restaurant(
        id="api-r3",
        name="Mindful Meals Kitchen",
        address="789 Organic Blvd, Clean Eating City",
        distance_km=0.7,
        rating=4.8,
        delivery_time_minutes=20,
    ),
)

# Used for listings whose meals carry no restaurant.
DEMO_RESTAURANTS: tuple[Restaurant, ...] = (
    Restaurant("rest1", "Health Haven", "123 Nutrition St", 1.2, 4.7, 25),
    Restaurant("rest2", "Vitality Kitchen", "456 Wellness Ave", 0.8, 4.5, 20),
    Restaurant("rest3", "Green Plate", "789 Organic Blvd", 1.5, 4.8, 30),
    Restaurant("rest4", "Nutrifit Cafe", "321 Balance Road", 2.0, 4.3, 35),
)

CATALOG_MEALS: tuple[Meal, ...] = (
    Meal(
        id="m1",
        name="Anti-Inflammatory Berry Smoothie",
        description=(
            "A nutrient-packed smoothie with berries rich in antioxidants to help "
            "reduce inflammation and support immune function."
        ),
        calories=285,
        protein_g=15,
        carbs_g=42,
        fats_g=7,
        suitable_for=("arthritis", "lupus", "heart_disease", "cancer"),
        allergens=(),
        ingredients=(
            "1 cup mixed berries (blueberries, strawberries, raspberries)",
            "1 small banana",
            "1 tablespoon ground flaxseed",
            "1 tablespoon chia seeds",
            "1/4 teaspoon turmeric",
            "1 cup unsweetened almond milk",
            "1 scoop plant-based protein powder (optional)",
        ),
        preparation=(
            "Add all ingredients to a blender and blend until smooth. "
            "Serve immediately."
        ),
        meal_type=MealType.BREAKFAST,
        tags=(
            "anti-inflammatory",
            "high-fiber",
            "antioxidant-rich",
            "gluten-free",
            "dairy-free",
        ),
        price=8.99,
        restaurant=CATALOG_RESTAURANTS[0],
        image="https://images.unsplash.com/photo-1618160702438-9b02ab6515c9",
        source=MealSource.CATALOG,
    ),
    Meal(
        id="m2",
        name="Gut-Healing Bone Broth Soup",
        description=(
            "A soothing soup that helps heal the digestive tract and provides "
            "essential nutrients for gut health."
        ),
        calories=220,
        protein_g=18,
        carbs_g=15,
        fats_g=10,
        suitable_for=("crohns_disease", "ulcerative_colitis", "ibs", "celiac_disease"),
        allergens=(),
        ingredients=(
            "2 cups homemade bone broth (chicken or beef)",
            "1 cup mixed vegetables (carrots, celery, zucchini), diced",
            "1 tablespoon olive oil",
            "1 teaspoon grated ginger",
            "1 clove garlic, minced",
            "Sea salt and herbs to taste",
        ),
        preparation=(
            "In a pot, saute garlic in olive oil. Add vegetables and cook until "
            "softened. Add bone broth and ginger, then simmer for 15-20 minutes. "
            "Season to taste."
        ),
        meal_type=MealType.LUNCH,
        tags=(
            "gut-healing",
            "easy-to-digest",
            "anti-inflammatory",
            "gluten-free",
            "dairy-free",
        ),
        price=12.99,
        restaurant=CATALOG_RESTAURANTS[1],
        image="https://images.unsplash.com/photo-1547592180-85f173990554",
        source=MealSource.CATALOG,
    ),
    Meal(
        id="m3",
        name="Blood Sugar-Balancing Plate",
        description=(
            "A balanced meal designed to help regulate blood sugar levels and "
            "provide sustained energy."
        ),
        calories=390,
        protein_g=30,
        carbs_g=30,
        fats_g=15,
        suitable_for=("diabetes", "hypothyroidism", "hyperthyroidism"),
        allergens=(),
        ingredients=(
            "4 oz grilled wild-caught salmon or tempeh",
            "1/2 cup cooked quinoa",
            "2 cups steamed non-starchy vegetables (broccoli, spinach, bell peppers)",
            "1 tablespoon olive oil",
            "Lemon juice, herbs and spices to taste",
        ),
        preparation=(
            "Cook protein of choice. Steam vegetables and prepare quinoa. Combine "
            "on a plate with olive oil drizzled over top. Add seasonings to taste."
        ),
        meal_type=MealType.DINNER,
        tags=("low-glycemic", "balanced-macros", "omega-3-rich", "gluten-free"),
        price=15.99,
        restaurant=CATALOG_RESTAURANTS[2],
        image="https://images.unsplash.com/photo-1574484284002-952d92456975",
        source=MealSource.CATALOG,
    ),
    Meal(
        id="m4",
        name="Heart-Healthy Mediterranean Bowl",
        description=(
            "A nutrient-dense bowl inspired by the Mediterranean diet to support "
            "cardiovascular health."
        ),
        calories=420,
        protein_g=15,
        carbs_g=45,
        fats_g=22,
        suitable_for=("heart_disease", "hypertension", "high_cholesterol"),
        allergens=("nuts",),
        ingredients=(
            "1/2 cup cooked farro or brown rice",
            "1/2 cup chickpeas",
            "1 cup mixed greens",
            "1/4 cup cucumber, diced",
            "1/4 cup cherry tomatoes, halved",
            "2 tablespoons hummus",
            "2 tablespoons olive oil",
            "1 tablespoon lemon juice",
            "1 tablespoon walnuts",
            "Fresh herbs (parsley, mint) to garnish",
        ),
        preparation=(
            "Layer all ingredients in a bowl, starting with grains, then "
            "vegetables, chickpeas, and hummus. Drizzle with olive oil and lemon "
            "juice, top with walnuts and herbs."
        ),
        meal_type=MealType.LUNCH,
        tags=("heart-healthy", "high-fiber", "plant-based", "omega-3-rich"),
        price=13.99,
        restaurant=CATALOG_RESTAURANTS[0],
        image="https://images.unsplash.com/photo-1512621776951-a57141f2eefd",
        source=MealSource.CATALOG,
    ),
    Meal(
        id="m5",
        name="Immune-Supporting Vegetable Soup",
        description=(
            "A nourishing soup packed with vegetables, herbs, and spices to "
            "support immune function."
        ),
        calories=180,
        protein_g=8,
        carbs_g=25,
        fats_g=6,
        suitable_for=("cancer", "lupus", "multiple_sclerosis", "heart_disease"),
        allergens=(),
        ingredients=(
            "1 onion, diced",
            "2 carrots, diced",
            "2 celery stalks, diced",
            "1 zucchini, diced",
            "2 garlic cloves, minced",
            "1 tablespoon grated ginger",
            "1 teaspoon turmeric",
            "4 cups vegetable broth",
            "1 cup kale, chopped",
            "1 tablespoon olive oil",
            "Fresh herbs (thyme, parsley) to taste",
            "Sea salt and black pepper to taste",
        ),
        preparation=(
            "Saute onion, carrots, and celery in olive oil. Add garlic, ginger, "
            "and turmeric, then add broth and remaining vegetables. Simmer for "
            "20-25 minutes until vegetables are tender. Add herbs and season."
        ),
        meal_type=MealType.DINNER,
        tags=(
            "immune-supporting",
            "anti-inflammatory",
            "nutrient-dense",
            "vegan",
            "gluten-free",
        ),
        price=11.99,
        restaurant=CATALOG_RESTAURANTS[1],
        image="https://images.unsplash.com/photo-1578020190125-f4f7c18bc9cb",
        source=MealSource.CATALOG,
    ),
    Meal(
        id="m6",
        name="Anti-Inflammatory Golden Milk",
        description=(
            "A warming, spiced milk drink with turmeric to help reduce "
            "inflammation and support overall health."
        ),
        calories=120,
        protein_g=4,
        carbs_g=8,
        fats_g=7,
        suitable_for=("arthritis", "lupus", "heart_disease", "ibs"),
        allergens=(),
        ingredients=(
            "1 cup unsweetened coconut or almond milk",
            "1 teaspoon turmeric powder",
            "1/2 teaspoon cinnamon",
            "1/4 teaspoon ginger powder",
            "1 pinch black pepper",
            "1 teaspoon honey or maple syrup (optional)",
            "1/2 teaspoon coconut oil",
        ),
        preparation=(
            "Heat milk in a small saucepan. Whisk in turmeric, cinnamon, ginger, "
            "and black pepper. Simmer for 5 minutes, then add sweetener and "
            "coconut oil if using. Strain and serve warm."
        ),
        meal_type=MealType.SNACK,
        tags=("anti-inflammatory", "soothing", "dairy-free", "caffeine-free"),
        price=6.99,
        restaurant=CATALOG_RESTAURANTS[2],
        image="https://images.unsplash.com/photo-1589881133595-a3c085cb731d",
        source=MealSource.CATALOG,
    ),
)
