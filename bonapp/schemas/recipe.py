"""Recipe schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bonapp.services.quantity import parse_quantity


class RecipeIngredientInput(BaseModel):
    """Product used by a recipe; the quantity may be left out."""

    product_id: int
    quantity: float | None = None

    @field_validator("quantity", mode="before")
    @classmethod
    def parse(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return parse_quantity(value)


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    prepare_time: int = Field(..., gt=0, description="Minutes")
    visibility: bool = False
    steps: list[str] = []
    ingredients: list[RecipeIngredientInput] = []
    categories: list[str] = []

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Recipe title cannot be empty")
        return value


class RecipeResponse(BaseModel):
    """Recipe list entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    prepare_time: int
    visibility: bool
    user_id: str


class RecipeStep(BaseModel):
    order: int
    instruction: str


class RecipeIngredientResponse(BaseModel):
    product_id: int
    quantity: float | None = None
    product_name: str = ""
    unit: str | None = None
    in_pantry: bool = False


class RecipeDetailResponse(RecipeResponse):
    """Recipe with steps, ingredients and categories."""

    steps: list[RecipeStep] = []
    ingredients: list[RecipeIngredientResponse] = []
    categories: list[str] = []
    is_favorite: bool = False


class FavoriteResponse(BaseModel):
    recipe_id: str
    is_favorite: bool


class RecommendationResponse(BaseModel):
    """Recipe suggestion with the pantry products it still needs."""

    model_config = ConfigDict(from_attributes=True)

    recipe: RecipeResponse
    missing_product_ids: list[int]
    available_product_ids: list[int]
    missing_count: int
