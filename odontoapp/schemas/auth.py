"""Authentication and session schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegistrationForm(BaseModel):
    """Registration screen form; checked by the form validator, not by pydantic."""

    model_config = ConfigDict(populate_by_name=True)

    nome: str = ""
    username: str = ""
    email: str = ""
    senha: str = ""
    confirmar_senha: str = Field(default="", alias="confirmarSenha")
    telefone: str = ""
    cpf: str = ""


class LoginForm(BaseModel):
    """Login screen form."""

    email: str = ""
    senha: str = ""


class IdentityAccount(BaseModel):
    """Account returned by the identity provider after sign-up or sign-in."""

    uid: str
    email: str = ""
    display_name: str = ""
    id_token: str = ""
    refresh_token: str = ""


class SessionUser(BaseModel):
    """Signed-in identity mirrored into the session store."""

    id: str
    username: str = ""
    email: str = ""
    role: str = "User"


class SessionResponse(BaseModel):
    """Current session state."""

    signed: bool
    user: SessionUser | None = None
    offline_user: SessionUser | None = Field(
        default=None,
        description="Last signed-in account read from the persisted slot, display only",
    )
    screen: str


class RegistrationResponse(BaseModel):
    """Registration outcome."""

    message: str
    user: SessionUser
