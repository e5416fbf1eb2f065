from fastapi import (
    FastAPI,
    Request,
    Query,
    Form,
    File,
    UploadFile,
    Depends,
)
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from contextlib import asynccontextmanager
from datetime import date as _date
from typing import List, Optional
from urllib.parse import quote
import logging

from basket.api.deps import get_fridge_checks, get_storage, read_upload
from basket.api.routes import activity, archive, fridge, recipes, shopping
from basket.domain.errors import NotFoundError, PersistenceError, StaleSelectionError, ValidationError
from basket.events.web_observers import start as start_event_observers
from basket.infra.storage import Storage
from basket.logic.archive.browse import archive_detail_view, archive_list_view
from basket.logic.archive.create import ArchiveCreator
from basket.logic.fridge.sessions import FridgeCheckSessions
from basket.logic.recipes.edit import IngredientRow, RecipeEditor
from basket.utilities.config import DEBUG, STATIC_DIR, TEMPLATES_DIR
from basket.utilities.constants import MSG_NO_SHOPPING_LIST, UNITS

# Logging
logger = logging.getLogger("basket_app")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Register event bus subscribers for the activity feed when the app starts."""
    start_event_observers()
    logger.info("Activity observers started")
    yield


# Initialize FastAPI app
app = FastAPI(title="Basket: Recipes, Shopping List & Archive", debug=DEBUG, lifespan=lifespan)

# Include routers
app.include_router(shopping.router)
app.include_router(fridge.router)
app.include_router(archive.router)
app.include_router(recipes.router)
app.include_router(activity.router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# -------------------- Error mapping --------------------
def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _error_response(request: Request, status_code: int, message: str, errors=None):
    if _wants_json(request):
        content = {"error": message}
        if errors:
            content["errors"] = errors
        return JSONResponse(status_code=status_code, content=content)
    return templates.TemplateResponse(
        request, "empty_state.html",
        {"icon": "❌", "title": message, "text": ""},
        status_code=status_code,
    )


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return _error_response(request, 400, exc.message, exc.errors)


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    return _error_response(request, 404, exc.message)


@app.exception_handler(StaleSelectionError)
async def _stale_selection(request: Request, exc: StaleSelectionError):
    return _error_response(request, 409, exc.message)


@app.exception_handler(PersistenceError)
async def _persistence_error(request: Request, exc: PersistenceError):
    logger.error("Persistence failure on %s: %s", request.url.path, exc.message)
    return _error_response(request, 500, exc.message)


def _redirect(url: str, notice: Optional[str] = None) -> RedirectResponse:
    if notice:
        url = f"{url}?notice={quote(notice)}"
    return RedirectResponse(url=url, status_code=303)


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page():
    return _redirect("/shopping-list")


@app.get("/shopping-list", response_class=HTMLResponse)
def shopping_list_page(request: Request, notice: Optional[str] = Query(default=None),
                       storage: Storage = Depends(get_storage)):
    shopping_list = storage.load_shopping_list()
    title, text = MSG_NO_SHOPPING_LIST
    return templates.TemplateResponse(
        request, "shopping_list.html",
        {"shopping_list": shopping_list, "empty_title": title, "empty_text": text, "notice": notice},
    )


# --- Fridge check ---
@app.get("/fridge-check", response_class=HTMLResponse)
def fridge_check_entry(storage: Storage = Depends(get_storage),
                       checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    token, _ = checks.open(storage)
    return _redirect(f"/fridge-check/{token}")


@app.get("/fridge-check/{token}", response_class=HTMLResponse)
def fridge_check_page(request: Request, token: str, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    view = checks.get(token).view()
    return templates.TemplateResponse(
        request, "fridge_check.html",
        {"token": token, "view": view, "confirm_prompt": None},
    )


@app.post("/fridge-check/{token}/toggle/{index}")
def fridge_check_toggle(token: str, index: int, checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    checks.get(token).toggle(index)
    return _redirect(f"/fridge-check/{token}")


@app.post("/fridge-check/{token}/amount/{index}")
def fridge_check_amount(token: str, index: int, value: str = Form(""),
                        checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    checks.get(token).set_have_amount(index, value)
    return _redirect(f"/fridge-check/{token}")


@app.post("/fridge-check/{token}/apply", response_class=HTMLResponse)
def fridge_check_apply(request: Request, token: str, confirm: str = Form(""),
                       checks: FridgeCheckSessions = Depends(get_fridge_checks)):
    check = checks.get(token)
    outcome = check.apply(confirm_empty=confirm == "yes")
    if outcome.status == "needs_confirmation":
        return templates.TemplateResponse(
            request, "fridge_check.html",
            {"token": token, "view": check.view(), "confirm_prompt": outcome.message},
        )
    checks.discard(token)
    if outcome.navigate is None:
        return _redirect("/shopping-list")
    return _redirect(outcome.navigate.url, outcome.message or None)


# --- Archive ---
@app.get("/archive", response_class=HTMLResponse)
def archive_page(request: Request, notice: Optional[str] = Query(default=None),
                 storage: Storage = Depends(get_storage)):
    view = archive_list_view(storage.load_archive())
    return templates.TemplateResponse(request, "archive_list.html", {"view": view, "notice": notice})


@app.get("/archive/new", response_class=HTMLResponse)
def archive_create_page(request: Request, storage: Storage = Depends(get_storage)):
    view = ArchiveCreator.start(storage).view()
    return templates.TemplateResponse(request, "archive_create.html", {"view": view, "error": None, "form": {}})


@app.post("/archive/new", response_class=HTMLResponse)
async def archive_create_submit(
    request: Request,
    store_name: str = Form(""),
    amount: str = Form(""),
    date: str = Form(""),
    receipt: Optional[UploadFile] = File(None),
    storage: Storage = Depends(get_storage),
):
    creator = ArchiveCreator.start(storage)
    form = {"store_name": store_name, "amount": amount, "date": date}
    try:
        if receipt is not None and receipt.filename:
            creator.select_receipt(receipt.filename, receipt.content_type, await read_upload(receipt))
        outcome = creator.submit(store_name, amount, date or _date.today().isoformat())
    except (ValidationError, PersistenceError) as exc:
        return templates.TemplateResponse(
            request, "archive_create.html",
            {"view": creator.view(), "error": exc.message, "form": form},
            status_code=400 if isinstance(exc, ValidationError) else 500,
        )
    return _redirect(outcome["navigate"].url, outcome["message"])


@app.get("/archive/{entry_id}", response_class=HTMLResponse)
def archive_detail_page(request: Request, entry_id: str, storage: Storage = Depends(get_storage)):
    view = archive_detail_view(storage.load_archive(), entry_id)
    return templates.TemplateResponse(request, "archive_detail.html", {"entry": view})


# --- Recipes ---
@app.get("/recipes/{recipe_id}", response_class=HTMLResponse)
def recipe_detail_page(request: Request, recipe_id: str, notice: Optional[str] = Query(default=None),
                       storage: Storage = Depends(get_storage)):
    recipe = RecipeEditor.load(storage, recipe_id).recipe
    return templates.TemplateResponse(request, "recipe_detail.html", {"recipe": recipe, "notice": notice})


@app.get("/recipes/{recipe_id}/edit", response_class=HTMLResponse)
def recipe_edit_page(request: Request, recipe_id: str, storage: Storage = Depends(get_storage)):
    editor = RecipeEditor.load(storage, recipe_id)
    return templates.TemplateResponse(
        request, "recipe_edit.html", {"view": editor.view(), "units": UNITS, "error": None}
    )


@app.post("/recipes/{recipe_id}/edit", response_class=HTMLResponse)
async def recipe_edit_submit(
    request: Request,
    recipe_id: str,
    action: str = Form("save"),
    name: str = Form(""),
    servings: str = Form(""),
    instructions: str = Form(""),
    amount: List[str] = Form([]),
    unit: List[str] = Form([]),
    ingredient: List[str] = Form([]),
    image: Optional[UploadFile] = File(None),
    image_data: str = Form(""),
    storage: Storage = Depends(get_storage),
):
    """Save the form, or add/remove an ingredient row and show the form again."""
    editor = RecipeEditor.load(storage, recipe_id)
    editor.rows = [IngredientRow(a, u, n) for a, u, n in zip(amount, unit, ingredient)]
    if image_data:
        editor.keep_image(image_data)
    error = None
    try:
        if image is not None and image.filename:
            editor.set_image(image.filename, image.content_type, await read_upload(image))
        if action == "add_row":
            editor.add_row()
        elif action.startswith("remove_row:") and action.split(":", 1)[1].isdigit():
            editor.remove_row(int(action.split(":", 1)[1]))
        else:
            outcome = editor.submit(name, servings, instructions)
            return _redirect(outcome["navigate"].url, outcome["message"])
    except (ValidationError, PersistenceError) as exc:
        error = exc.message

    view = editor.view()
    view.update({"name": name, "servings": servings, "instructions": instructions})
    return templates.TemplateResponse(
        request, "recipe_edit.html", {"view": view, "units": UNITS, "error": error},
        status_code=400 if error else 200,
    )
