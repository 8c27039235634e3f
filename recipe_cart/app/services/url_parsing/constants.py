"""Selector ladders and vocabularies used by the extractors and matchers."""

JSON_LD_TYPE = "application/ld+json"

INGREDIENT_SELECTORS = (
    '[itemprop="recipeIngredient"]',
    ".recipe-ingredient",
    ".ingredient",
    ".recipe-ingredients li",
    ".ingredients li",
    '[class*="ingredient"] li',
)

INSTRUCTION_SELECTORS = (
    '[itemprop="recipeInstructions"] li',
    ".recipe-instructions li",
    ".instructions li",
    ".recipe-steps li",
    '[class*="instruction"] li',
    '[class*="step"] li',
)

PRODUCT_CARD_SELECTOR = (
    '[data-testid="product-tile"], .product-tile, .product-card, [class*="ProductCard"]'
)
PRODUCT_NAME_SELECTOR = 'h2, h3, [class*="ProductName"], [class*="product-name"]'
PRODUCT_PRICE_SELECTOR = '[class*="price"], .price, [data-testid="price"]'

PRODUCT_IMAGE_SELECTORS = (
    'img[data-testid="product-image"]',
    'img[class*="ProductImage"]',
    '[class*="ImageGallery"] img',
    "main img",
    "img",
)
PRODUCT_DETAIL_PRICE_SELECTORS = (
    '[class*="price"]',
    ".price",
    '[data-testid="price"]',
    '[class*="Price"]',
)

RECIPE_LINK_SELECTOR = 'a[href*="/recipe/"]'
RECIPE_TITLE_SELECTOR = 'h4, h3, h2, [class*="title"], [class*="Title"]'

FALLBACK_QUERY = "ingredient"

# Units, counts and prep descriptors that never help a grocery search.
STOPWORDS = frozenset(
    {
        # volume
        "cup", "cups", "tablespoon", "tablespoons", "tbsp", "tbsps", "tbs",
        "teaspoon", "teaspoons", "tsp", "tsps", "pint", "pints", "quart",
        "quarts", "gallon", "gallons", "liter", "liters", "litre", "litres",
        "milliliter", "milliliters", "ml",
        # weight
        "pound", "pounds", "lb", "lbs", "ounce", "ounces", "oz", "gram",
        "grams", "g", "kg", "kilogram", "kilograms",
        # counts and containers
        "piece", "pieces", "clove", "cloves", "can", "cans", "jar", "jars",
        "package", "packages", "pkg", "bottle", "bottles", "stick", "sticks",
        "slice", "slices", "pinch", "pinches", "dash", "dashes", "handful",
        "bunch", "bunches", "sprig", "sprigs", "inch", "inches", "head",
        "heads", "container", "containers",
        # descriptors
        "fresh", "freshly", "chopped", "finely", "roughly", "coarsely",
        "thinly", "minced", "diced", "sliced", "grated", "shredded", "crushed",
        "cubed", "halved", "quartered", "peeled", "trimmed", "rinsed",
        "drained", "melted", "softened", "packed", "divided", "large",
        "small", "medium", "extra", "room", "temperature",
        # filler
        "of", "to", "for", "and", "the", "into", "plus", "more", "about",
        "taste", "topping", "optional", "serving",
    }
)
