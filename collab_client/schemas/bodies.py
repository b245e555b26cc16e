"""
Collab client schemas for request bodies of operations without own domain object

Those schemas replace ad hoc string maps while keeping the same wire shape:
every field is a string, and fields that have not been set are not sent.
"""

from typing import Optional

import pydantic


__all__ = [
    "LoginRequest",
    "PasswordResetRequest",
    "PasswordResetSendRequest",
    "PasswordUpdateRequest",
    "RolesUpdateRequest",
]


class LoginRequest(pydantic.BaseModel):
    login_id: Optional[str] = None
    id: Optional[str] = None
    password: str
    ldap_only: Optional[bool] = None
    device_id: Optional[str] = None

    @pydantic.field_serializer("ldap_only")
    def serialize_ldap_only(self, value: Optional[bool]) -> Optional[str]:
        if value is None:
            return None
        return "true" if value else "false"


class PasswordUpdateRequest(pydantic.BaseModel):
    current_password: str
    new_password: str


class RolesUpdateRequest(pydantic.BaseModel):
    roles: str


class PasswordResetSendRequest(pydantic.BaseModel):
    email: str


class PasswordResetRequest(pydantic.BaseModel):
    code: str
    new_password: str
