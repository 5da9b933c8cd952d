"""Service layer orchestrating the PokeAPI client."""
from .pokedex_service import PokedexService

__all__ = ['PokedexService']
