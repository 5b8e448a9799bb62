"""Field-set form validation run before any remote call.

Rules are fixed and checked in order; the first failure is reported as a
single message.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date

from odontoapp.core.exceptions import ValidationException
from odontoapp.schemas.auth import LoginForm, RegistrationForm

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
CPF_DIGITS = 11

REGISTRATION_REQUIRED = ("nome", "username", "email", "senha", "confirmar_senha", "cpf")
LOGIN_REQUIRED = ("email", "senha")


def only_digits(value: str) -> str:
    """Strip every non-digit character."""
    return re.sub(r"\D", "", value)


def require_fields(values: Mapping[str, object], fields: Iterable[str], message: str) -> None:
    """Reject when any listed field is empty."""
    if any(not values.get(field) for field in fields):
        raise ValidationException(message)


def require_email(email: str) -> None:
    """Reject emails not shaped like local@domain.tld."""
    if not EMAIL_PATTERN.search(email):
        raise ValidationException("Por favor, informe um email válido.")


def validate_registration(form: RegistrationForm) -> None:
    """
    Validate the registration form.

    Raises:
        ValidationException: On the first failing rule
    """
    require_fields(
        form.model_dump(),
        REGISTRATION_REQUIRED,
        "Por favor, preencha todos os campos obrigatórios.",
    )

    if form.senha != form.confirmar_senha:
        raise ValidationException("As senhas não coincidem.")

    require_email(form.email)

    if len(only_digits(form.cpf)) != CPF_DIGITS:
        raise ValidationException("Por favor, informe um CPF válido com 11 dígitos.")


def validate_login(form: LoginForm) -> None:
    """
    Validate the login form.

    Raises:
        ValidationException: On the first failing rule
    """
    require_fields(form.model_dump(), LOGIN_REQUIRED, "Por favor, preencha todos os campos.")
    require_email(form.email)


def validate_appointment_selection(selected_date: str | None, provider_id: int | None) -> date:
    """
    Validate a booking or rescheduling selection.

    Returns:
        The parsed calendar date

    Raises:
        ValidationException: If the date or provider is missing or the date is malformed
    """
    if not selected_date or not provider_id:
        raise ValidationException("Por favor, selecione uma data e um dentista")

    try:
        return date.fromisoformat(selected_date)
    except ValueError:
        raise ValidationException("Data inválida. Use o formato AAAA-MM-DD.")
