from docsearch.domains.identity.entities import Identity, User
from docsearch.domains.identity.schemas import UserCreate, UserLogin, UserResponse, Token
from docsearch.domains.identity.services import IdentityService

__all__ = [
    "Identity", "User",
    "UserCreate", "UserLogin", "UserResponse", "Token",
    "IdentityService"
]
