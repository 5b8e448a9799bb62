"""Tests for form validation."""

from datetime import date

import pytest

from odontoapp.core.exceptions import ValidationException
from odontoapp.core.validation import (
    only_digits,
    validate_appointment_selection,
    validate_login,
    validate_registration,
)
from odontoapp.schemas.auth import LoginForm, RegistrationForm


@pytest.fixture
def registration() -> dict:
    return {
        "nome": "Joana Lima",
        "username": "joana",
        "email": "joana@example.com",
        "senha": "segredo123",
        "confirmarSenha": "segredo123",
        "telefone": "",
        "cpf": "123.456.789-01",
    }


def test_valid_registration_passes(registration):
    validate_registration(RegistrationForm(**registration))


@pytest.mark.parametrize("field", ["nome", "username", "email", "senha", "confirmarSenha", "cpf"])
def test_registration_requires_fields(registration, field):
    """Test each required registration field."""
    registration[field] = ""

    with pytest.raises(ValidationException) as exc_info:
        validate_registration(RegistrationForm(**registration))

    assert exc_info.value.message == "Por favor, preencha todos os campos obrigatórios."


def test_registration_phone_is_optional(registration):
    registration["telefone"] = ""
    validate_registration(RegistrationForm(**registration))


def test_registration_password_mismatch(registration):
    registration["confirmarSenha"] = "outra"

    with pytest.raises(ValidationException) as exc_info:
        validate_registration(RegistrationForm(**registration))

    assert exc_info.value.message == "As senhas não coincidem."


@pytest.mark.parametrize("email", ["joana", "joana@example", "joana example.com"])
def test_registration_rejects_bad_email(registration, email):
    registration["email"] = email

    with pytest.raises(ValidationException) as exc_info:
        validate_registration(RegistrationForm(**registration))

    assert exc_info.value.message == "Por favor, informe um email válido."


@pytest.mark.parametrize("cpf", ["1234567890", "123456789012", "abc.def.ghi-jk"])
def test_registration_rejects_bad_cpf(registration, cpf):
    registration["cpf"] = cpf

    with pytest.raises(ValidationException) as exc_info:
        validate_registration(RegistrationForm(**registration))

    assert exc_info.value.message == "Por favor, informe um CPF válido com 11 dígitos."


def test_rules_checked_in_order(registration):
    """Test the password rule is reported before the email rule."""
    registration["confirmarSenha"] = "outra"
    registration["email"] = "invalido"

    with pytest.raises(ValidationException) as exc_info:
        validate_registration(RegistrationForm(**registration))

    assert exc_info.value.message == "As senhas não coincidem."


def test_only_digits():
    assert only_digits("123.456.789-01") == "12345678901"


def test_login_requires_both_fields():
    with pytest.raises(ValidationException) as exc_info:
        validate_login(LoginForm(email="joana@example.com", senha=""))

    assert exc_info.value.message == "Por favor, preencha todos os campos."


def test_login_rejects_bad_email():
    with pytest.raises(ValidationException):
        validate_login(LoginForm(email="joana", senha="segredo"))


def test_appointment_selection_returns_date():
    assert validate_appointment_selection("2025-05-20", 2) == date(2025, 5, 20)


@pytest.mark.parametrize("selected_date,provider_id", [(None, 2), ("2025-05-20", None), ("", 1)])
def test_appointment_selection_requires_both(selected_date, provider_id):
    with pytest.raises(ValidationException) as exc_info:
        validate_appointment_selection(selected_date, provider_id)

    assert exc_info.value.message == "Por favor, selecione uma data e um dentista"


def test_appointment_selection_rejects_malformed_date():
    with pytest.raises(ValidationException):
        validate_appointment_selection("20/05/2025", 2)
