import json
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from basket.api.deps import get_storage, read_upload
from basket.domain.errors import NotFoundError, ValidationError
from basket.infra.storage import Storage
from basket.logic.recipes.edit import RecipeEditor
from basket.utilities.constants import MSG_CHECK_INGREDIENTS, MSG_RECIPE_NOT_FOUND

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def parse_rows(ingredients: str) -> list:
    """Ingredient rows arrive as a JSON string inside the form."""
    try:
        rows = json.loads(ingredients or "[]")
    except json.JSONDecodeError:
        raise ValidationError(MSG_CHECK_INGREDIENTS)
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValidationError(MSG_CHECK_INGREDIENTS)
    return rows


@router.get("")
def list_recipes(storage: Storage = Depends(get_storage)):
    return [{"id": r.id, "name": r.name, "servings": r.servings} for r in storage.load_recipes()]


@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, storage: Storage = Depends(get_storage)):
    for recipe in storage.load_recipes():
        if recipe.id == recipe_id:
            return recipe.to_dict()
    raise NotFoundError(MSG_RECIPE_NOT_FOUND)


@router.get("/{recipe_id}/edit")
def edit_recipe_view(recipe_id: str, storage: Storage = Depends(get_storage)):
    return RecipeEditor.load(storage, recipe_id).view()


@router.post("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    name: str = Form(""),
    servings: str = Form(""),
    instructions: str = Form(""),
    ingredients: str = Form("[]"),  # JSON string
    image: Optional[UploadFile] = File(None),
    storage: Storage = Depends(get_storage),
):
    editor = RecipeEditor.load(storage, recipe_id)
    if image is not None and image.filename:
        editor.set_image(image.filename, image.content_type, await read_upload(image))
    outcome = editor.submit(name, servings, instructions, parse_rows(ingredients))
    return {
        "recipe": outcome["recipe"].to_dict(),
        "message": outcome["message"],
        "navigate": outcome["navigate"].to_dict(),
    }
