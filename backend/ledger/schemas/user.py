from pydantic import BaseModel, ConfigDict, Field, field_validator

class LoginCredentials(BaseModel):
    """Body of login: a wrong password of any length is just a wrong password."""
    username: str = Field(min_length=1, max_length=150)
    password: str

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v

class UserCredentials(LoginCredentials):
    """Body of register."""
    password: str = Field(min_length=6)

class UserOut(BaseModel):
    # never carries the password hash
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
