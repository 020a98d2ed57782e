"""Collection names shared by the SQL schema and the hosted data API."""

SHOPPING_LISTS = "shopping_list"
LIST_ITEMS = "product_on_list"
PANTRY = "pantry"
PRODUCTS = "product"
PRODUCT_CATEGORIES = "product_category"
RECIPES = "recipe"
RECIPE_CATEGORIES = "category"
RECIPE_CATEGORY_LINKS = "recipe_category"
RECIPE_INGREDIENTS = "product_in_recipe"
FAVORITE_RECIPES = "favorite_recipe"
