from pydantic import BaseModel, field_validator, EmailStr

PASSWORD_MIN_LENGTH = 6


class UserCreate(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        """Require at least 6 characters and at most bcrypt's 72-byte limit when UTF-8 encoded.

        Raise a validation error so the API answers 400 with a clear message.
        """
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"password too short: must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
        return v


class UserLogin(BaseModel):
    # EmailStr normalizes the same way as on signup, so stored addresses match
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: str
    email: str
