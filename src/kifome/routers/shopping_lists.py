"""API routes for ingredient consolidation and shopping lists."""

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from kifome.logging_config import get_logger
from kifome.models import ShoppingItem, ShoppingList
from kifome.plan.consolidator import consolidate, format_lines, items_from_ingredients
from kifome.plan.shopping_list import (
    ItemNotFoundError,
    ListNotFoundError,
    ShoppingListService,
)
from kifome.plan.weekly import process_weekly_ingredients
from kifome.schemas import Recipe, WeeklyPlan

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ShoppingItemSchema(BaseModel):
    """Shopping list item."""

    id: str | None = Field(None, description="Omit to have an id assigned")
    name: str
    quantity: str = ""
    checked: bool = False
    recipe_id: str | None = None
    recipe_title: str | None = None

    @classmethod
    def from_item(cls, item: ShoppingItem) -> "ShoppingItemSchema":
        return cls(**item.to_dict())

    def to_item(self) -> ShoppingItem:
        return ShoppingItem.from_dict(self.model_dump())


class ShoppingListResponse(BaseModel):
    """Stored shopping list."""

    id: str
    title: str
    type: str
    items: list[ShoppingItemSchema]
    created_at: int
    week_id: str | None = None
    recipe_id: str | None = None

    @classmethod
    def from_list(cls, shopping_list: ShoppingList) -> "ShoppingListResponse":
        return cls(
            id=shopping_list.id,
            title=shopping_list.title,
            type=shopping_list.type,
            items=[ShoppingItemSchema.from_item(item) for item in shopping_list.items],
            created_at=shopping_list.created_at,
            week_id=shopping_list.week_id,
            recipe_id=shopping_list.recipe_id,
        )


class IngredientsRequest(BaseModel):
    """Raw ingredient lines from a generated recipe."""

    ingredients: list[str]
    recipe_title: str | None = None
    recipe_id: str | None = None


class ConsolidateItemsRequest(BaseModel):
    """Shopping items to consolidate."""

    items: list[ShoppingItemSchema]


class ConsolidatedResponse(BaseModel):
    """Consolidated items and their display lines."""

    items: list[ShoppingItemSchema]
    lines: list[str]


class WeeklyIngredientsResponse(BaseModel):
    """Grouped ingredient lines for a weekly plan."""

    ingredients: list[str]


class RecipeListRequest(BaseModel):
    """Recipe to turn into a shopping list."""

    recipe: Recipe
    recipe_id: str | None = None


class ItemUpdateRequest(BaseModel):
    """Partial update of a shopping list item."""

    name: str | None = None
    quantity: str | None = None
    checked: bool | None = None


# =============================================================================
# Dependencies
# =============================================================================


@lru_cache
def get_shopping_list_service() -> ShoppingListService:
    """Get the process-wide shopping list service."""
    return ShoppingListService()


def _consolidated_response(items: list[ShoppingItem]) -> ConsolidatedResponse:
    return ConsolidatedResponse(
        items=[ShoppingItemSchema.from_item(item) for item in items],
        lines=format_lines(items),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/consolidate", response_model=ConsolidatedResponse)
async def consolidate_ingredient_lines(request: IngredientsRequest) -> ConsolidatedResponse:
    """Parse raw ingredient lines and consolidate them into shopping items."""
    items = items_from_ingredients(
        request.ingredients,
        recipe_title=request.recipe_title,
        recipe_id=request.recipe_id,
    )
    return _consolidated_response(consolidate(items))


@router.post("/consolidate-items", response_model=ConsolidatedResponse)
async def consolidate_shopping_items(request: ConsolidateItemsRequest) -> ConsolidatedResponse:
    """Consolidate existing shopping items."""
    items = [schema.to_item() for schema in request.items]
    return _consolidated_response(consolidate(items))


@router.post("/weekly-plan", response_model=WeeklyIngredientsResponse)
async def weekly_plan_ingredients(plan: WeeklyPlan) -> WeeklyIngredientsResponse:
    """Group and sum all ingredients of a weekly meal plan."""
    return WeeklyIngredientsResponse(ingredients=process_weekly_ingredients(plan))


@router.get("/weekly", response_model=ShoppingListResponse)
async def get_weekly_list(
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Get the weekly shopping list."""
    shopping_list = service.get_weekly_list()
    if shopping_list is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Weekly shopping list not found",
        )
    return ShoppingListResponse.from_list(shopping_list)


@router.delete("/weekly", status_code=status.HTTP_204_NO_CONTENT)
async def clear_weekly_list(
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    """Clear the weekly shopping list."""
    service.clear_weekly_list()


@router.post("/weekly/items", response_model=ShoppingListResponse)
async def add_weekly_items(
    request: IngredientsRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Add ingredient lines to the weekly list, consolidating with existing items."""
    items = items_from_ingredients(
        request.ingredients,
        recipe_title=request.recipe_title,
        recipe_id=request.recipe_id,
    )
    return ShoppingListResponse.from_list(service.add_items_to_weekly_list(items))


@router.post("/weekly/recipes", response_model=ShoppingListResponse)
async def add_weekly_recipe(
    request: RecipeListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Add every ingredient of a recipe to the weekly list."""
    shopping_list = service.add_recipe_to_weekly_list(request.recipe, request.recipe_id)
    return ShoppingListResponse.from_list(shopping_list)


@router.patch("/weekly/items/{item_id}", response_model=ShoppingItemSchema)
async def update_weekly_item(
    item_id: str,
    request: ItemUpdateRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingItemSchema:
    """Update an item of the weekly list (e.g. check it off)."""
    updates = request.model_dump(exclude_none=True)
    try:
        item = service.update_weekly_list_item(item_id, **updates)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ShoppingItemSchema.from_item(item)


@router.post("/single", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
async def create_single_list(
    request: RecipeListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Create a shopping list for a single recipe."""
    shopping_list = service.create_single_list(request.recipe, request.recipe_id)
    return ShoppingListResponse.from_list(shopping_list)


@router.get("/single", response_model=list[ShoppingListResponse])
async def list_single_lists(
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> list[ShoppingListResponse]:
    """List all single-recipe shopping lists, newest first."""
    return [ShoppingListResponse.from_list(entry) for entry in service.list_single_lists()]


@router.get("/single/{list_id}", response_model=ShoppingListResponse)
async def get_single_list(
    list_id: str,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Get a single-recipe shopping list."""
    try:
        shopping_list = service.get_single_list(list_id)
    except ListNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ShoppingListResponse.from_list(shopping_list)


@router.delete("/single/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_single_list(
    list_id: str,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    """Delete a single-recipe shopping list."""
    logger.info(f"Deleting shopping list {list_id}")
    try:
        service.delete_single_list(list_id)
    except ListNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
