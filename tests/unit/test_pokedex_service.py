import pytest
from unittest.mock import AsyncMock, call
from app.catalog import STARTERS, InvalidGenerationError
from app.clients.pokeapi_client import APIClientError, PokemonNotFoundError
from app.models import Pokemon
from app.services.pokedex_service import PokedexService, parse_integer, parse_pokedex_id


def make_pokemon(pokemon_id: int) -> Pokemon:
    return Pokemon(id=pokemon_id, name=f"pokemon-{pokemon_id}", types=["normal"], sprite=None)

@pytest.fixture
def poke_client():
    # Use AsyncMock for methods that are awaited
    client = AsyncMock()
    client.get_pokemon_by_id.side_effect = make_pokemon
    client.get_pokemon_by_name.return_value = Pokemon(id=25, name="pikachu", types=["electric"])
    return client

@pytest.fixture
def pokedex_service(poke_client):
    return PokedexService(poke_client=poke_client)


@pytest.mark.parametrize(
    "value, expected",
    [("25", 25), ("0", 0), ("-3", -3), ("pikachu", None), ("mr-mime", None), ("", None)],
)
def test_parse_pokedex_id(value, expected):
    assert parse_pokedex_id(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("10", 10),
        ("+7", 7),
        ("-12", -12),
        ("9223372036854775807", 2 ** 63 - 1),
        ("-9223372036854775808", -(2 ** 63)),
        ("1_0", None),
        ("\u0662\u0665", None),  # Arabic-Indic "25"
        ("\uff12\uff15", None),  # fullwidth "25"
        ("9223372036854775808", None),
        ("99999999999999999999999999", None),
        ("1.5", None),
        ("0x1a", None),
        ("", None),
        ("+", None),
    ],
)
def test_parse_integer_accepts_only_plain_ascii_integers(value, expected):
    assert parse_integer(value) == expected


@pytest.mark.asyncio
async def test_lookup_non_ascii_digits_go_by_name(pokedex_service, poke_client):
    await pokedex_service.lookup("\u0662\u0665")

    poke_client.get_pokemon_by_name.assert_called_once_with("\u0662\u0665")
    poke_client.get_pokemon_by_id.assert_not_called()

# --- LOOKUP ---

@pytest.mark.asyncio
async def test_lookup_numeric_query_fetches_by_id(pokedex_service, poke_client):
    result = await pokedex_service.lookup("25")

    poke_client.get_pokemon_by_id.assert_called_once_with(25)
    poke_client.get_pokemon_by_name.assert_not_called()
    assert result.id == 25

@pytest.mark.asyncio
async def test_lookup_name_query_fetches_by_lowercased_name(pokedex_service, poke_client):
    result = await pokedex_service.lookup("Pikachu")

    poke_client.get_pokemon_by_name.assert_called_once_with("pikachu")
    poke_client.get_pokemon_by_id.assert_not_called()
    assert result.name == "pikachu"

@pytest.mark.asyncio
async def test_lookup_propagates_client_errors(pokedex_service, poke_client):
    poke_client.get_pokemon_by_name.side_effect = PokemonNotFoundError("missingno")

    with pytest.raises(PokemonNotFoundError):
        await pokedex_service.lookup("missingno")

# --- GENERATION ---

@pytest.mark.asyncio
async def test_generation_fetches_whole_range_in_order(pokedex_service, poke_client):
    """
    Generation 1 is IDs 1..151, fetched one by one in increasing order.
    """
    result = await pokedex_service.get_generation(1)

    assert len(result) == 151
    assert [p.id for p in result] == list(range(1, 152))
    assert poke_client.get_pokemon_by_id.call_args_list == [call(i) for i in range(1, 152)]
    # Generation listings do not stamp the generation field
    assert all(p.generation == 0 for p in result)

@pytest.mark.asyncio
async def test_generation_eight_range(pokedex_service, poke_client):
    result = await pokedex_service.get_generation(8)

    assert result[0].id == 810
    assert result[-1].id == 1008

@pytest.mark.asyncio
async def test_invalid_generation_makes_no_upstream_calls(pokedex_service, poke_client):
    with pytest.raises(InvalidGenerationError):
        await pokedex_service.get_generation(9)

    poke_client.get_pokemon_by_id.assert_not_called()

@pytest.mark.asyncio
async def test_generation_aborts_on_first_failure(pokedex_service, poke_client):
    """
    A failure part-way through stops the loop; nothing after it is fetched.
    """
    def fail_on_third(pokemon_id):
        if pokemon_id == 154:
            raise APIClientError(detail="PokeAPI failed with status 502")
        return make_pokemon(pokemon_id)

    poke_client.get_pokemon_by_id.side_effect = fail_on_third

    with pytest.raises(APIClientError) as excinfo:
        await pokedex_service.get_generation(2)

    assert "502" in excinfo.value.detail
    assert poke_client.get_pokemon_by_id.call_args_list == [call(152), call(153), call(154)]

# --- STARTERS ---

@pytest.mark.asyncio
async def test_starters_are_stamped_with_catalog_index(pokedex_service, poke_client):
    result = await pokedex_service.get_starters()

    assert len(result) == 27
    assert [p.generation for p in result] == list(range(1, 28))
    assert [p.id for p in result] == [STARTERS[i] for i in range(1, 28)]

@pytest.mark.asyncio
async def test_starters_fail_fast(pokedex_service, poke_client):
    poke_client.get_pokemon_by_id.side_effect = [
        make_pokemon(1),
        make_pokemon(4),
        APIClientError(detail="PokeAPI network error: timed out"),
    ]

    with pytest.raises(APIClientError):
        await pokedex_service.get_starters()

    assert poke_client.get_pokemon_by_id.call_count == 3

@pytest.mark.asyncio
async def test_starters_do_not_mutate_fetched_records(pokedex_service, poke_client):
    """Stamping works on a copy; the record the client returned is untouched."""
    bulbasaur = make_pokemon(1)
    poke_client.get_pokemon_by_id.side_effect = None
    poke_client.get_pokemon_by_id.return_value = bulbasaur

    result = await pokedex_service.get_starters()

    assert bulbasaur.generation == 0
    assert result[0].generation == 1
    assert result[0] is not bulbasaur
