from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, FrozenSet, Iterable, Literal, Union

from zemiguard.core.errors import ErrorKind, error_for


class Allow(BaseModel):
    model_config = ConfigDict(frozen=True)

    effect: Literal["allow"] = "allow"

    @property
    def allowed(self) -> bool:
        return True


class Deny(BaseModel):
    model_config = ConfigDict(frozen=True)

    effect: Literal["deny"] = "deny"
    reason: ErrorKind = ErrorKind.NOT_AUTHORIZED
    detail: str = ""

    @property
    def allowed(self) -> bool:
        return False

    def raise_error(self):
        """Raise the AuthorizationError matching this denial's reason"""
        raise error_for(self.reason, self.detail)


class AllowWithFieldMask(BaseModel):
    """Allowed, but the storage executor may only write allowed_fields"""
    model_config = ConfigDict(frozen=True)

    effect: Literal["allow_with_field_mask"] = "allow_with_field_mask"
    allowed_fields: FrozenSet[str]

    @property
    def allowed(self) -> bool:
        return True


Decision = Annotated[Union[Allow, Deny, AllowWithFieldMask], Field(discriminator="effect")]


def allow() -> Allow:
    return Allow()


def deny(detail: str = "", reason: ErrorKind = ErrorKind.NOT_AUTHORIZED) -> Deny:
    return Deny(reason=reason, detail=detail)


def allow_fields(fields: Iterable[str]) -> AllowWithFieldMask:
    return AllowWithFieldMask(allowed_fields=frozenset(fields))
