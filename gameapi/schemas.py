"""Request payload schemas.

Payloads arrive in the dashboard's camelCase wire format and are exposed to
the services as snake_case field dicts. Update schemas leave every field
optional; only the fields a client actually sent reach the service.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as SchemaError, field_validator
from pydantic.alias_generators import to_camel

from gameapi.errors import ValidationError
from gameapi.models import INT_MAX

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


class Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )


# Auth
class Credentials(Payload):
    # Passwords are hashed and compared exactly as sent
    model_config = ConfigDict(str_strip_whitespace=False)

    @field_validator('username', 'email', mode='before', check_fields=False)
    @classmethod
    def strip_identity(cls, value):
        return value.strip() if isinstance(value, str) else value


class RegisterRequest(Credentials):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=100)


class LoginRequest(Credentials):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# Players
class PlayerCreate(Payload):
    name: str = Field(..., min_length=2, max_length=50)


class PlayerUpdate(Payload):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    level: Optional[int] = Field(None, ge=1, le=100)
    experience: Optional[int] = Field(None, ge=0, le=INT_MAX)
    gold: Optional[int] = Field(None, ge=0, le=INT_MAX)
    health: Optional[int] = Field(None, ge=1, le=1000)
    mana: Optional[int] = Field(None, ge=0, le=1000)


# Characters
class CharacterCreate(Payload):
    name: str = Field(..., min_length=2, max_length=50)
    character_class: str = Field(..., min_length=1, max_length=30)
    player_id: int = Field(..., le=INT_MAX)


class CharacterUpdate(Payload):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    level: Optional[int] = Field(None, ge=1, le=100)
    experience: Optional[int] = Field(None, ge=0, le=INT_MAX)
    strength: Optional[int] = Field(None, ge=1, le=1000)
    intelligence: Optional[int] = Field(None, ge=1, le=1000)
    dexterity: Optional[int] = Field(None, ge=1, le=1000)
    vitality: Optional[int] = Field(None, ge=1, le=1000)
    health: Optional[int] = Field(None, ge=1, le=INT_MAX)
    is_active: Optional[bool] = None


# Items
class ItemCreate(Payload):
    name: str = Field(..., min_length=2, max_length=50)
    description: str = Field('', max_length=200)
    item_type: str = Field(..., min_length=1, max_length=30)
    attack_bonus: int = Field(0, ge=0, le=1000)
    defense_bonus: int = Field(0, ge=0, le=1000)
    value: int = Field(0, ge=0, le=INT_MAX)
    rarity: int = Field(1, ge=1, le=10)
    quantity: int = Field(1, ge=1, le=999)
    player_id: Optional[int] = Field(None, le=INT_MAX)


class ItemUpdate(Payload):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    is_equipped: Optional[bool] = None
    quantity: Optional[int] = Field(None, ge=1, le=999)


# Scores
class ScoreCreate(Payload):
    game_mode: str = Field(..., min_length=1, max_length=50)
    points: int = Field(0, ge=0, le=INT_MAX)
    kills: int = Field(0, ge=0, le=INT_MAX)
    deaths: int = Field(0, ge=0, le=INT_MAX)
    time_played: float = Field(0.0, ge=0, allow_inf_nan=False)
    difficulty_level: int = Field(1, ge=1, le=100)
    player_id: int = Field(..., le=INT_MAX)


def _describe(exc):
    err = exc.errors()[0]
    location = '.'.join(str(part) for part in err.get('loc', ())) or 'body'
    return f"{location}: {err.get('msg', 'invalid value')}"


def parse(schema, data, partial=False):
    """Validate ``data`` against ``schema`` and return a snake_case field dict.

    With ``partial`` only the fields present (and non-null) in the request are
    returned, which is what the update operations apply.
    """
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        model = schema.model_validate(data)
    except SchemaError as exc:
        raise ValidationError(_describe(exc))
    if partial:
        return model.model_dump(exclude_unset=True, exclude_none=True)
    return model.model_dump()
