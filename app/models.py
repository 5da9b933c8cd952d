from pydantic import BaseModel, ConfigDict

# Record built from the PokeAPI /pokemon/{name|id} payload (Internal Contract)
class Pokemon(BaseModel):
    # Frozen: generation is only ever stamped on a copy
    model_config = ConfigDict(frozen=True)

    generation: int = 0
    id: int
    name: str
    types: list[str] = []
    sprite: str | None = None
