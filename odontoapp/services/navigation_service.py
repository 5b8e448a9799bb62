"""Screen stack for the patient app."""

from enum import Enum

import structlog

from odontoapp.core.exceptions import ConflictException, NotFoundException

logger = structlog.get_logger(__name__)


class Screen(str, Enum):
    """Named screens of the app."""

    LOGIN = "Login"
    REGISTRATION = "Cadastro"
    HOME = "Funcionalidades"
    APPOINTMENTS = "Agendamentos"
    NOTIFICATIONS = "Alertas"
    PROFILE = "PerfilPaciente"
    CLINIC_SEARCH = "BuscarClinicas"


def parse_screen(name: str) -> Screen:
    """
    Resolve a screen by name.

    Raises:
        NotFoundException: If no screen has that name
    """
    try:
        return Screen(name)
    except ValueError:
        raise NotFoundException(f"Tela desconhecida: {name}")


class NavigationService:
    """Forward/back/reset transitions over a stack of screens."""

    def __init__(self, initial: Screen = Screen.LOGIN):
        """Initialize with a single-screen stack."""
        self.initial = initial
        self._stack: list[Screen] = [initial]

    @property
    def current(self) -> Screen:
        return self._stack[-1]

    @property
    def stack(self) -> list[Screen]:
        return list(self._stack)

    def navigate(self, screen: Screen) -> Screen:
        """Go to ``screen``; returns to it if it is already on the stack."""
        if screen in self._stack:
            del self._stack[self._stack.index(screen) + 1 :]
        else:
            self._stack.append(screen)
        logger.info("navigated", screen=screen.value, depth=len(self._stack))
        return self.current

    def back(self) -> Screen:
        """
        Pop the current screen.

        Raises:
            ConflictException: If already at the root screen
        """
        if len(self._stack) == 1:
            raise ConflictException("Não há tela anterior")
        self._stack.pop()
        return self.current

    def reset(self, screen: Screen) -> Screen:
        """Replace the whole stack with ``screen``."""
        self._stack = [screen]
        logger.info("navigation_reset", screen=screen.value)
        return self.current
