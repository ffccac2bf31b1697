"""Pydantic models for Tandoor API payloads and MCP tool results."""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from tandoor_mcp.errors import TandoorAPIError


def _whole_number(value: int | float) -> int | float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Numeric field rendered in tool text; 2.0 and 2 both display as "2"
Number = Annotated[int | float, AfterValidator(_whole_number)]


# Base Models
class TandoorBase(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(extra="ignore")


class NamedRef(TandoorBase):
    """Nested food/unit reference. Tandoor needs the name, the id is optional."""

    id: int | None = None
    name: str


# Reference entities
class ReferenceEntity(TandoorBase):
    """Named entity with an id, as listed by the food/unit/keyword endpoints."""

    id: int
    name: str
    description: str | None = None


class Food(ReferenceEntity):
    """Food model."""


class Unit(ReferenceEntity):
    """Unit model."""


class Keyword(ReferenceEntity):
    """Keyword model."""

    label: str | None = None


class MealType(TandoorBase):
    """Meal type (Breakfast, Dinner, ...) maintained by Tandoor."""

    id: int
    name: str


# Recipe Models
class IngredientCreate(TandoorBase):
    """Ingredient as submitted inside a recipe step."""

    food: NamedRef
    unit: NamedRef
    amount: str
    note: str | None = None


class StepCreate(TandoorBase):
    """Recipe step with its instruction text and ingredients."""

    instruction: str
    ingredients: list[IngredientCreate] = Field(default_factory=list)


class RecipeCreate(TandoorBase):
    """Payload for POST /api/recipe/."""

    name: str
    description: str | None = None
    servings: int | None = None
    steps: list[StepCreate] = Field(default_factory=list)


class RecipeSummary(TandoorBase):
    """Recipe as returned by the recipe search endpoint."""

    id: int
    name: str
    description: str | None = None
    rating: Number | None = None
    servings: int | None = None
    keywords: list[Keyword] = Field(default_factory=list)


class RecipePage(TandoorBase):
    """Paginated recipe search response."""

    count: int = 0
    results: list[RecipeSummary] = Field(default_factory=list)


# Meal Plan Models
class MealPlanRecipeRef(TandoorBase):
    """Recipe reference inside a meal plan. Keywords are echoed back untouched."""

    id: int
    name: str
    keywords: list[dict[str, Any]] = Field(default_factory=list)


class MealPlanCreate(TandoorBase):
    """Payload for POST /api/meal-plan/."""

    recipe: MealPlanRecipeRef
    meal_type: MealType
    from_date: str
    to_date: str | None = None
    servings: str
    title: str | None = None
    note: str | None = None


class EntryRef(TandoorBase):
    """Loosely populated id/name pair on listed meal plan entries."""

    id: int | None = None
    name: str | None = None


class MealPlanEntry(TandoorBase):
    """A meal plan entry as listed by Tandoor."""

    id: int
    title: str | None = None
    recipe: EntryRef | None = None
    meal_type: EntryRef | None = None
    from_date: str = ""
    servings: Number | str | None = None
    note: str | None = None


# Shopping List Models
class ShoppingListItem(TandoorBase):
    """An entry on the shopping list."""

    id: int
    food: NamedRef | None = None
    unit: NamedRef | None = None
    amount: Number | str | None = None
    checked: bool = False
    note: str | None = None


class ShoppingListItemCreate(TandoorBase):
    """Payload for POST /api/shopping-list-entry/."""

    food: NamedRef
    unit: NamedRef
    amount: str
    note: str | None = None


# Resolver Models
class ResolvedReference(TandoorBase):
    """Outcome of resolving a name-or-id reference."""

    id: int
    name: str | None = None


# Batch Models
class BatchFailure(BaseModel):
    """A labelled per-item failure inside a batch operation."""

    label: str
    message: str


class MealPlanBatchResult(BaseModel):
    """Per-recipe outcomes of a meal plan creation."""

    successes: list[str] = Field(default_factory=list)
    failures: list[BatchFailure] = Field(default_factory=list)

    def add_success(self, line: str) -> None:
        self.successes.append(line)

    def add_failure(self, label: str, message: str) -> None:
        self.failures.append(BatchFailure(label=label, message=message))

    def failure_messages(self) -> list[str]:
        return [f.message for f in self.failures]

    def render(self) -> str:
        """Success lines, then an "Errors encountered" section if anything failed."""
        text = "\n".join(self.successes)
        if self.failures:
            text += "\n\nErrors encountered:\n" + "\n".join(self.failure_messages())
        return text


# Error Models
class ErrorResponse(BaseModel):
    """Structured error response for MCP tools."""

    error: bool = True
    code: str
    message: str
    status_code: int | None = None
    details: str | None = None

    @classmethod
    def invalid_argument(cls, message: str) -> "ErrorResponse":
        return cls(code="INVALID_ARGUMENT", message=message)

    @classmethod
    def not_found(cls, message: str) -> "ErrorResponse":
        return cls(code="NOT_FOUND", message=message)

    @classmethod
    def internal_error(cls, message: str) -> "ErrorResponse":
        return cls(code="INTERNAL_ERROR", message=message)

    @classmethod
    def api_error(cls, exc: TandoorAPIError) -> "ErrorResponse":
        status = exc.status_code if exc.status_code is not None else "Network Error"
        return cls(
            code="INTERNAL_ERROR",
            message=f"Tandoor API Error ({status}): {exc.body or exc.message}",
            status_code=exc.status_code,
            details=exc.body,
        )
