import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Form, Request, status, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.catalog import InvalidGenerationError
from app.clients.pokeapi_client import APIClientError
from app.config import ASSETS_DIR
from app.dependencies import close_poke_client, get_pokedex_service, get_templates
from app.services.pokedex_service import PokedexService, parse_integer, parse_pokedex_id

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_poke_client()


app = FastAPI(
    title="Pokedex Web",
    description="HTML front-end rendering Pokemon data fetched from PokeAPI.",
    lifespan=lifespan,
)
app.mount("/assets", StaticFiles(directory=ASSETS_DIR), name="assets")


# Errors are answered as plain text, never as JSON
@app.exception_handler(StarletteHTTPException)
async def plain_text_http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def bad_form_handler(request: Request, exc: RequestValidationError):
    return PlainTextResponse("Bad Request", status_code=status.HTTP_400_BAD_REQUEST)


def render(templates: Jinja2Templates, request: Request, name: str, context: dict = None):
    """Renders a page; a template failure becomes a 500 carrying the error text."""
    try:
        return templates.TemplateResponse(request, name, context or {})
    except Exception as e:
        logger.exception(f"Rendering {name} failed: {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def bad_request() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request")


def internal_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")


@app.get("/", response_class=HTMLResponse, summary="Landing page")
async def home(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    return render(templates, request, "index.html")


@app.get("/pokedex", response_class=HTMLResponse, summary="Empty Pokedex lookup form")
async def pokedex_form(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    return render(templates, request, "pokedex.html", {"pokemon": None})


@app.post("/pokedex", response_class=HTMLResponse, summary="Looks up one Pokemon by name or ID")
async def pokedex_lookup(
    request: Request,
    pokedex_id: str = Form("", alias="pokedexID"),
    service: PokedexService = Depends(get_pokedex_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    query = pokedex_id.strip()
    if not query:
        raise bad_request()

    try:
        pokemon = await service.lookup(query)
    except APIClientError as e:
        # A failed name lookup is the client's fault, a failed ID lookup is ours
        if parse_pokedex_id(query) is None:
            logger.info(f"Name lookup for '{query}' failed: {e.detail}")
            raise bad_request()
        logger.error(f"ID lookup for {query} failed: {e.detail}")
        raise internal_error()

    return render(templates, request, "pokedex.html", {"pokemon": pokemon})


@app.get("/generation", response_class=HTMLResponse, summary="Empty generation form")
async def generation_form(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    return render(templates, request, "generation.html", {"generation": None, "pokemon_list": None})


@app.post("/generation", response_class=HTMLResponse, summary="Lists every Pokemon of a generation")
async def generation_listing(
    request: Request,
    generation: str = Form(""),
    service: PokedexService = Depends(get_pokedex_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    generation_number = parse_integer(generation.strip())
    if generation_number is None:
        raise bad_request()

    try:
        pokemon_list = await service.get_generation(generation_number)
    except (InvalidGenerationError, APIClientError) as e:
        logger.error(f"Generation {generation_number} listing failed: {e}")
        raise internal_error()

    return render(
        templates,
        request,
        "generation.html",
        {"generation": generation_number, "pokemon_list": pokemon_list},
    )


@app.get("/starters", response_class=HTMLResponse, summary="Lists the starter Pokemon of every generation")
async def starters(
    request: Request,
    service: PokedexService = Depends(get_pokedex_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    try:
        pokemon_list = await service.get_starters()
    except APIClientError as e:
        logger.error(f"Starters listing failed: {e.detail}")
        raise internal_error()

    return render(templates, request, "starters.html", {"pokemon_list": pokemon_list})


if __name__ == "__main__":
    import uvicorn
    from app.config import HOST, LOG_LEVEL, PORT

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)
