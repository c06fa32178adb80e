from pydantic import BaseModel, ConfigDict


class Language(BaseModel):
    """A selectable language from the static catalog."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    native: str
