"""Recipe domain entity: id, name, servings, embedded image, ingredients, instructions."""
from typing import Any, Dict, List, Optional, Union


class Ingredient:
    def __init__(self, amount: Union[int, float, str] = "", unit: str = "", name: str = ""):
        self.amount = amount
        self.unit = unit
        self.name = name

    def __str__(self) -> str:
        return f"{self.amount} {self.unit} {self.name}".strip()

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(d.get("amount", ""), d.get("unit", "") or "", d.get("name", "") or "")

    def to_dict(self):
        return {"amount": self.amount, "unit": self.unit, "name": self.name}


class Recipe:
    def __init__(self, id: str, name: str = "", servings: int = 1,
                 ingredients: Optional[List[Ingredient]] = None, instructions: str = "",
                 image: Optional[str] = None):
        self.id = id
        self.name = name
        self.servings = servings
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions
        self.image = image

    def __str__(self) -> str:
        return f"{self.name} - {self.servings} servings - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]):
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(
            id=str(d.get("id", "")),
            name=d.get("name", "") or "",
            servings=d.get("servings", 1),
            ingredients=[Ingredient.from_dict(ing) for ing in d.get("ingredients", []) or []],
            instructions=d.get("instructions", "") or "",
            image=d.get("image") or None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "servings": self.servings,
            "image": self.image,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": self.instructions,
        }
