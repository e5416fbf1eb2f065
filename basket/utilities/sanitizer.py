"""Normalization of stored values: embedded images and recipe text fields."""
import base64
import binascii
import re
from typing import Any, Optional

from basket.domain.errors import ValidationError
from basket.utilities.constants import ALLOWED_IMAGE_TYPES, MSG_INVALID_IMAGE
from basket.utilities.validators import validate_image_file

DATA_URL_PATTERN = re.compile(r'^data:(image/[a-z]+);base64,([A-Za-z0-9+/]+={0,2})$')
CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')

# Leading bytes per normalized image format
_MAGIC = {
    'jpeg': (b'\xff\xd8\xff',),
    'png': (b'\x89PNG\r\n\x1a\n',),
    'webp': (b'RIFF',),
}


def _matches_magic(fmt: str, payload: bytes) -> bool:
    if fmt == 'webp':
        return payload[:4] == b'RIFF' and payload[8:12] == b'WEBP'
    return any(payload.startswith(m) for m in _MAGIC.get(fmt, ()))


def to_data_url(content_type: str, data: bytes) -> str:
    """Encode raw image bytes as a data URL (no validation)."""
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{content_type.lower()};base64,{encoded}"


def validate_image_data_url(url: Any) -> Optional[str]:
    """Return the normalized data URL, or None when it is not a safe embedded image."""
    if not isinstance(url, str):
        return None
    match = DATA_URL_PATTERN.match(url.strip())
    if not match:
        return None
    fmt = ALLOWED_IMAGE_TYPES.get(match.group(1))
    if fmt is None:
        return None
    try:
        payload = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        return None
    if not _matches_magic(fmt, payload):
        return None
    return f"data:image/{fmt};base64,{match.group(2)}"


def sanitize_text(value: Any) -> str:
    if value is None:
        return ''
    return CONTROL_CHARS.sub('', str(value)).strip()


def sanitize_recipe(record: dict) -> dict:
    """Return a cleaned copy of a recipe record; an unsafe image is dropped."""
    ingredients = []
    for ing in record.get('ingredients') or []:
        ingredients.append({
            'amount': ing.get('amount'),
            'unit': sanitize_text(ing.get('unit')),
            'name': sanitize_text(ing.get('name')),
        })
    image = record.get('image')
    return {
        'id': sanitize_text(record.get('id')),
        'name': sanitize_text(record.get('name')),
        'servings': record.get('servings'),
        'image': validate_image_data_url(image) if image else None,
        'ingredients': ingredients,
        # keep line breaks in instructions
        'instructions': '\n'.join(sanitize_text(line) for line in str(record.get('instructions') or '').splitlines()).strip(),
    }


def load_embedded_image(filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
    """Turn an uploaded image into a normalized data URL or raise ValidationError."""
    check = validate_image_file(filename, content_type, len(data or b''))
    if not check.valid:
        raise ValidationError(check.error)
    url = validate_image_data_url(to_data_url(content_type, data))
    if not url:
        raise ValidationError(MSG_INVALID_IMAGE)
    return url
