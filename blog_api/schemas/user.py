"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALLOWED_ROLES = {"admin", "author", "editor", "user", "guest"}

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(v: str) -> str:
	v = v.strip().lower()
	if not EMAIL_PATTERN.match(v):
		raise ValueError("Invalid email address")
	return v


class UserBase(BaseModel):
	email: str
	name: str = Field(..., min_length=1, max_length=255)
	role: str = "user"

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _normalize_email(v)

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: str) -> str:
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v


class UserCreate(UserBase):
	password: str = Field(..., min_length=6)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "writer@example.com",
			"name": "Abebe Kebede",
			"password": "StrongPass!234",
			"role": "author",
		}
	})


class UserUpdate(BaseModel):
	email: Optional[str] = None
	name: Optional[str] = Field(None, min_length=1, max_length=255)
	password: Optional[str] = Field(None, min_length=6)
	role: Optional[str] = None
	avatar_url: Optional[str] = None
	bio: Optional[str] = None
	is_active: Optional[bool] = None

	@field_validator("name", "is_active")
	@classmethod
	def reject_null(cls, v):
		if v is None:
			raise ValueError("Field may be omitted but cannot be null")
		return v

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: Optional[str]) -> str:
		if v is None:
			raise ValueError("Email cannot be null")
		return _normalize_email(v)

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: Optional[str]) -> str:
		if v is None:
			raise ValueError("Role cannot be null")
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v


class UserResponse(BaseModel):
	id: str
	email: str
	name: str
	role: str
	avatar_url: Optional[str] = None
	bio: Optional[str] = None
	is_active: bool
	last_login: Optional[datetime] = None
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
	"""Author block embedded in post responses."""
	id: str
	name: str
	email: str

	model_config = ConfigDict(from_attributes=True)


class RegisterRequest(BaseModel):
	email: str
	password: str = Field(..., min_length=6)
	name: str = Field(..., min_length=1, max_length=255)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _normalize_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "reader@example.com",
			"password": "StrongPass!234",
			"name": "Hana Tesfaye",
		}
	})


class LoginRequest(BaseModel):
	email: str
	password: str

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return v.strip().lower()


class RegisterResponse(BaseModel):
	message: str
	user: UserResponse


class TokenResponse(BaseModel):
	access_token: str
	token_type: str = "bearer"
	user: UserResponse
