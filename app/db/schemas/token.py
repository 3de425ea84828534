from pydantic import BaseModel
import typing as t

### SCHEMAS FOR TOKENS ###


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    email: t.Optional[str] = None
