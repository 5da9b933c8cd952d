import logging
import re
from app.catalog import STARTERS, get_generation_range
from app.clients.pokeapi_client import PokeAPIClient
from app.models import Pokemon

logger = logging.getLogger(__name__)


# Plain ASCII decimal, optionally signed; no underscores or other Unicode digits
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Form integers are 64-bit signed; anything wider does not parse
_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1


def parse_integer(value: str) -> int | None:
    """Returns the integer a form value spells, None when it is not one."""
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def parse_pokedex_id(value: str) -> int | None:
    """Returns the integer ID for a numeric query, None for a name."""
    return parse_integer(value)


class PokedexService:
    # Client comes in via Dependency Injection
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def lookup(self, query: str) -> Pokemon:
        """
        Fetches one Pokemon: numeric queries go by ID, anything else by name.
        """
        pokemon_id = parse_pokedex_id(query)
        if pokemon_id is None:
            return await self._poke_client.get_pokemon_by_name(query.lower())
        return await self._poke_client.get_pokemon_by_id(pokemon_id)

    async def get_generation(self, generation: int) -> list[Pokemon]:
        """
        Fetches every Pokemon of a generation, one request at a time in
        increasing ID order. The first failure aborts the whole listing.
        """
        start_id, end_id = get_generation_range(generation)
        logger.info(f"Fetching generation {generation}: IDs {start_id}-{end_id}")

        pokemon_list = []
        for pokemon_id in range(start_id, end_id + 1):
            pokemon_list.append(await self._poke_client.get_pokemon_by_id(pokemon_id))
        return pokemon_list

    async def get_starters(self) -> list[Pokemon]:
        """
        Fetches the starter catalog in catalog order, stamping each record's
        generation with its catalog index.
        """
        pokemon_list = []
        for index, pokemon_id in sorted(STARTERS.items()):
            pokemon = await self._poke_client.get_pokemon_by_id(pokemon_id)
            pokemon_list.append(pokemon.model_copy(update={'generation': index}))
        return pokemon_list
