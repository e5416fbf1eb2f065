"""
Input validation for user-entered values, using Pydantic for whole-record checks.

Every ``validate_*`` helper returns a :class:`ValidationResult` instead of raising,
so callers decide whether to abort or ignore.
"""
import math
from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from basket.utilities.config import MAX_IMAGE_BYTES
from basket.utilities.constants import ALLOWED_IMAGE_TYPES, UNITS


class ValidationResult(BaseModel):
    """Outcome of a single field check."""
    valid: bool
    value: Any = None
    error: Optional[str] = None


class RecipeValidation(BaseModel):
    """Outcome of the whole-record recipe check."""
    valid: bool
    errors: List[str] = Field(default_factory=list)


def _ok(value: Any) -> ValidationResult:
    return ValidationResult(valid=True, value=value)


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def _text(raw: Any, *, max_length: int, empty_error: str, long_error: str) -> ValidationResult:
    if raw is None:
        return _fail(empty_error)
    value = str(raw).strip()
    if not value:
        return _fail(empty_error)
    if len(value) > max_length:
        return _fail(long_error)
    return _ok(value)


def parse_number(raw: Any) -> Optional[float]:
    """Parse a number from user input ('1,5' is accepted). Returns None when not finite."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip().replace(',', '.')
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def validate_store_name(raw: Any) -> ValidationResult:
    return _text(raw, max_length=100,
                 empty_error="Bitte gib ein Geschäft ein",
                 long_error="Der Name des Geschäfts ist zu lang (max. 100 Zeichen)")


def validate_amount(raw: Any) -> ValidationResult:
    """Non-negative, finite amount up to 100000 (quantities and currency)."""
    number = parse_number(raw)
    if number is None:
        return _fail("Bitte gib eine gültige Zahl ein")
    if number < 0:
        return _fail("Der Betrag darf nicht negativ sein")
    if number > 100000:
        return _fail("Der Betrag ist zu groß")
    return _ok(int(number) if number.is_integer() and not isinstance(raw, float) else number)


def validate_date(raw: Any) -> ValidationResult:
    try:
        parsed = date.fromisoformat(str(raw or '').strip())
    except ValueError:
        return _fail("Bitte gib ein gültiges Datum ein")
    return _ok(parsed.isoformat())


def validate_recipe_name(raw: Any) -> ValidationResult:
    return _text(raw, max_length=200,
                 empty_error="Bitte gib einen Rezeptnamen ein",
                 long_error="Der Rezeptname ist zu lang (max. 200 Zeichen)")


def validate_servings(raw: Any) -> ValidationResult:
    number = parse_number(raw)
    if number is None or not number.is_integer():
        return _fail("Bitte gib eine ganze Zahl an Personen ein")
    if not 1 <= number <= 100:
        return _fail("Die Anzahl Personen muss zwischen 1 und 100 liegen")
    return _ok(int(number))


def validate_unit(raw: Any) -> ValidationResult:
    value = str(raw or '').strip()
    if value not in UNITS:
        return _fail(f"Unbekannte Einheit: {value}")
    return _ok(value)


def validate_ingredient_name(raw: Any) -> ValidationResult:
    return _text(raw, max_length=100,
                 empty_error="Bitte gib einen Zutatennamen ein",
                 long_error="Der Zutatenname ist zu lang (max. 100 Zeichen)")


def validate_image_file(filename: Optional[str], content_type: Optional[str], size: int) -> ValidationResult:
    """Check an uploaded image by declared type and byte size."""
    if (content_type or '').lower() not in ALLOWED_IMAGE_TYPES:
        return _fail("Nur JPEG, PNG oder WebP Bilder sind erlaubt")
    if size <= 0:
        return _fail("Die Bilddatei ist leer")
    if size > MAX_IMAGE_BYTES:
        limit_mb = MAX_IMAGE_BYTES / (1024 * 1024)
        return _fail(f"Das Bild ist zu groß (max. {limit_mb:g} MB)")
    return _ok(filename or '')


class IngredientInput(BaseModel):
    """Schema for one recipe ingredient."""
    amount: float = Field(..., ge=0, le=100000)
    unit: str
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('unit')
    @classmethod
    def known_unit(cls, v):
        if v not in UNITS:
            raise ValueError(f'Unbekannte Einheit: {v}')
        return v

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Zutatenname darf nicht leer sein')
        return v.strip()


class RecipeInput(BaseModel):
    """Schema for a complete recipe record."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(..., ge=1, le=100)
    image: Optional[str] = None
    ingredients: List[IngredientInput]
    instructions: str = Field('', max_length=10000)

    @field_validator('ingredients')
    @classmethod
    def at_least_one(cls, v):
        if not v:
            raise ValueError('Rezept braucht mindestens eine Zutat')
        return v

    @field_validator('image')
    @classmethod
    def embedded_image(cls, v):
        if v and not v.startswith('data:image/'):
            raise ValueError('Bild muss eingebettet sein')
        return v


def validate_recipe(record: dict) -> RecipeValidation:
    """Validate a whole recipe record and collect every error."""
    try:
        RecipeInput.model_validate(record)
    except PydanticValidationError as exc:
        errors = []
        for err in exc.errors():
            field = '.'.join(str(p) for p in err.get('loc', ()))
            errors.append(f"{field}: {err.get('msg', '')}" if field else err.get('msg', ''))
        return RecipeValidation(valid=False, errors=errors)
    return RecipeValidation(valid=True)
