"""Recipe editing: ingredient rows, validation and replacement in the collection."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from basket.domain.Recipe import Ingredient, Recipe
from basket.domain.errors import NotFoundError, PersistenceError, ValidationError
from basket.events.Event_Bus import RECIPE_UPDATED, publish
from basket.logic.navigation import navigate_to
from basket.utilities.constants import (
    DEFAULT_UNIT, MSG_CHECK_INGREDIENTS, MSG_NEED_INGREDIENT, MSG_RECIPE_NOT_FOUND, MSG_RECIPE_SAVED,
    MSG_SAVE_FAILED, UNITS,
)
from basket.utilities.sanitizer import load_embedded_image, sanitize_recipe, validate_image_data_url
from basket.utilities.validators import (
    validate_amount, validate_ingredient_name, validate_recipe, validate_recipe_name, validate_servings, validate_unit,
)

logger = logging.getLogger(__name__)


@dataclass
class IngredientRow:
    amount: Any = ""
    unit: str = DEFAULT_UNIT
    name: str = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "IngredientRow":
        return IngredientRow(data.get("amount", ""), data.get("unit", DEFAULT_UNIT) or DEFAULT_UNIT,
                             data.get("name", "") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "unit": self.unit, "name": self.name}


class RecipeEditor:
    def __init__(self, storage, recipe: Recipe):
        self.storage = storage
        self.recipe = recipe
        self.image: Optional[str] = recipe.image
        self.rows: List[IngredientRow] = [IngredientRow(i.amount, i.unit, i.name) for i in recipe.ingredients]

    @classmethod
    def load(cls, storage, recipe_id: str) -> "RecipeEditor":
        for recipe in storage.load_recipes():
            if recipe.id == recipe_id:
                return cls(storage, recipe)
        raise NotFoundError(MSG_RECIPE_NOT_FOUND)

    def add_row(self) -> IngredientRow:
        row = IngredientRow()
        self.rows.append(row)
        return row

    def remove_row(self, index: int) -> None:
        if not 0 <= index < len(self.rows):
            raise NotFoundError(f"Keine Zutat an Position {index}")
        del self.rows[index]

    def set_image(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        self.image = load_embedded_image(filename, content_type, data)
        return self.image

    def keep_image(self, data_url: Any) -> Optional[str]:
        '''Take back an image accepted on an earlier form post; anything unsafe is ignored.'''
        url = validate_image_data_url(data_url)
        if url:
            self.image = url
        return self.image

    def view(self) -> Dict[str, Any]:
        return {
            "id": self.recipe.id,
            "name": self.recipe.name,
            "servings": self.recipe.servings,
            "instructions": self.recipe.instructions,
            "image": self.image,
            "rows": [row.to_dict() for row in self.rows],
            "units": UNITS,
        }

    def _validated_ingredients(self) -> List[Ingredient]:
        ingredients = []
        for row in self.rows:
            amount = validate_amount(row.amount)
            unit = validate_unit(row.unit)
            name = validate_ingredient_name(row.name)
            if not (amount.valid and unit.valid and name.valid):
                raise ValidationError(MSG_CHECK_INGREDIENTS)
            ingredients.append(Ingredient(amount.value, unit.value, name.value))
        if not ingredients:
            raise ValidationError(MSG_NEED_INGREDIENT)
        return ingredients

    def submit(self, name: Any, servings: Any, instructions: Any = "",
               rows: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        '''Validate the form and replace the stored recipe.

        Passing ``rows`` replaces the editor rows first (form submissions send the
        whole row list).
        '''
        if rows is not None:
            self.rows = [IngredientRow.from_dict(r) for r in rows]

        name_val = validate_recipe_name(name)
        if not name_val.valid:
            raise ValidationError(name_val.error)
        servings_val = validate_servings(servings)
        if not servings_val.valid:
            raise ValidationError(servings_val.error)
        ingredients = self._validated_ingredients()

        updated = Recipe(
            id=self.recipe.id,
            name=name_val.value,
            servings=servings_val.value,
            ingredients=ingredients,
            instructions=str(instructions or "").strip(),
            image=self.image,
        ).to_dict()

        validation = validate_recipe(updated)
        if not validation.valid:
            raise ValidationError("\n".join(validation.errors), validation.errors)

        recipes = self.storage.load_recipes()
        index = next((i for i, r in enumerate(recipes) if r.id == self.recipe.id), -1)
        if index == -1:
            raise NotFoundError(MSG_RECIPE_NOT_FOUND)

        recipes[index] = Recipe.from_dict(sanitize_recipe(updated))
        result = self.storage.save_recipes(recipes)
        if not result.success:
            raise PersistenceError(MSG_SAVE_FAILED + (result.error or ""))

        self.recipe = recipes[index]
        logger.info("Recipe %s saved (%s ingredients)", self.recipe.id, len(self.recipe.ingredients))
        publish(RECIPE_UPDATED, {"id": self.recipe.id, "name": self.recipe.name})
        return {
            "recipe": self.recipe,
            "message": MSG_RECIPE_SAVED,
            "navigate": navigate_to("recipe-detail", {"recipeId": self.recipe.id}),
        }
