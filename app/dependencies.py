import jinja2
from app.clients import PokeAPIClient
from app.services import PokedexService
from app.config import TEMPLATES_DIR
from fastapi import Depends
from fastapi.templating import Jinja2Templates

_poke_client = None
_templates = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

async def close_poke_client():
    global _poke_client
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None

def build_templates(directory: str) -> Jinja2Templates:
    # StrictUndefined turns a missing field into a render error
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(directory),
        autoescape=True,
        undefined=jinja2.StrictUndefined,
    )
    return Jinja2Templates(env=env)

def get_templates() -> Jinja2Templates:
    global _templates
    if _templates is None:
        _templates = build_templates(TEMPLATES_DIR)
    return _templates

def get_pokedex_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokedexService:
    return PokedexService(poke_client=poke_client)
