from typing import Final

DISPLAY_DATE_FORMAT: Final[str] = "%d.%m.%Y"
CURRENCY_SYMBOL: Final[str] = "€"

UNITS: Final[list[str]] = [
    "g", "kg", "ml", "L", "Stück", "EL", "TL", "Prise", "Packung", "Dose", "Bund",
]
DEFAULT_UNIT: Final[str] = "g"

MONTH_NAMES: Final[list[str]] = [
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]
WEEKDAY_NAMES: Final[list[str]] = [
    "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag",
]

ALLOWED_IMAGE_TYPES: Final[dict[str, str]] = {
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
}

# Record names inside the blob store
SHOPPING_LIST_RECORD: Final[str] = "shopping_list"
RECIPES_RECORD: Final[str] = "recipes"
ARCHIVE_RECORD: Final[str] = "archive"

UNKNOWN_MONTH_KEY: Final[str] = "unbekannt"

# User facing messages
MSG_NO_SHOPPING_LIST: Final[tuple[str, str]] = ("Keine Einkaufsliste", "Erstelle erst eine Einkaufsliste")
MSG_NO_ARCHIVE: Final[tuple[str, str]] = ("Kein Archiv", "Archiviere deinen ersten Einkauf!")
MSG_ENTRY_NOT_FOUND: Final[str] = "Eintrag nicht gefunden"
MSG_RECIPE_NOT_FOUND: Final[str] = "Rezept nicht gefunden"
MSG_CONFIRM_EMPTY_CHECK: Final[str] = "Keine Artikel ausgewählt. Fortfahren ohne Kühlschrank-Check?"
MSG_CHECK_DONE: Final[str] = "Kühlschrank-Check abgeschlossen!"
MSG_STALE_SELECTION: Final[str] = (
    "Die Einkaufsliste wurde inzwischen geändert. Bitte starte den Kühlschrank-Check neu."
)
MSG_INVALID_IMAGE: Final[str] = "Ungültiges Bildformat"
MSG_ARCHIVED: Final[str] = "Einkauf archiviert!"
MSG_ARCHIVE_FAILED: Final[str] = "Fehler beim Archivieren: "
MSG_CLEAR_FAILED: Final[str] = "Fehler beim Leeren der Einkaufsliste: "
MSG_CHECK_INGREDIENTS: Final[str] = "Bitte überprüfe die Zutaten"
MSG_NEED_INGREDIENT: Final[str] = "Bitte füge mindestens eine Zutat hinzu"
MSG_RECIPE_SAVED: Final[str] = "Änderungen gespeichert!"
MSG_SAVE_FAILED: Final[str] = "Fehler beim Speichern: "
