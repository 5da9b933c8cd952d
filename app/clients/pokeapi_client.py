import os
import httpx
from typing import Optional
from pydantic import ValidationError
from app.models import Pokemon
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

# Custom exception for every upstream failure (transport, status, decode)
class APIClientError(HTTPException):
    def __init__(self, detail: str, status_code: int = 500):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")

# Upstream answered 404 for the requested name or ID
class PokemonNotFoundError(APIClientError):
    def __init__(self, identifier: str):
        super().__init__(detail=f"Pokemon '{identifier}' not found.")
        self.identifier = identifier

class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(self, base_url: str = None, timeout: Optional[float] = None):
        # Use environment variables if not provided
        if base_url is None:
            base_url = os.getenv("POKEAPI_BASE_URL", self.BASE_URL)
        if timeout is None and os.getenv("POKEAPI_TIMEOUT"):
            timeout = float(os.getenv("POKEAPI_TIMEOUT"))
        # timeout=None disables httpx's default timeout entirely
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout, follow_redirects=True)

    async def _fetch_pokemon_data(self, identifier: str) -> dict:
        """Internal method to fetch the raw /pokemon payload with error handling."""
        url = f"/pokemon/{identifier}"
        logger.info(f"Fetching Pokemon: {identifier}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            return response.json()

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.warning(f"PokeAPI has no Pokemon: {identifier}")
                raise PokemonNotFoundError(identifier)
            logger.error(f"PokeAPI failed with status {e.response.status_code} for {identifier}")
            raise APIClientError(detail=f"PokeAPI failed with status {e.response.status_code}")
        except httpx.RequestError as e:
            # Handle network failures/timeouts
            logger.error(f"PokeAPI network error for {identifier}: {str(e)}")
            raise APIClientError(detail=f"PokeAPI network error: {str(e)}")
        except ValueError:
            logger.error(f"PokeAPI returned a non-JSON body for {identifier}")
            raise APIClientError(detail="PokeAPI returned an invalid JSON body.")

    async def _get_pokemon(self, identifier: str) -> Pokemon:
        data = await self._fetch_pokemon_data(identifier)

        try:
            return Pokemon(
                id=data['id'],
                name=data['name'],
                # Keep the slot order PokeAPI returns
                types=[entry['type']['name'] for entry in data['types']],
                sprite=data['sprites']['front_default'],
            )
        except (KeyError, TypeError, ValidationError) as e:
            logger.error(f"Unexpected PokeAPI payload for {identifier}: {e!r}")
            raise APIClientError(detail="PokeAPI returned an unexpected response format.")

    async def get_pokemon_by_name(self, name: str) -> Pokemon:
        """Fetches a single Pokemon by its PokeAPI name (e.g. 'pikachu')."""
        return await self._get_pokemon(name)

    async def get_pokemon_by_id(self, pokemon_id: int) -> Pokemon:
        """Fetches a single Pokemon by its national dex number."""
        return await self._get_pokemon(str(pokemon_id))

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
