"""Navigation endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from odontoapp.dependencies import Navigation
from odontoapp.services.navigation_service import NavigationService, parse_screen

router = APIRouter()


class NavigationRequest(BaseModel):
    """Target screen."""

    screen: str


class NavigationResponse(BaseModel):
    """Navigation stack state."""

    current: str
    stack: list[str]


def _state(navigation: NavigationService) -> NavigationResponse:
    return NavigationResponse(
        current=navigation.current.value,
        stack=[screen.value for screen in navigation.stack],
    )


@router.get("/", response_model=NavigationResponse, summary="Current screen stack")
async def get_navigation(navigation: Navigation) -> NavigationResponse:
    return _state(navigation)


@router.post(
    "/navigate",
    response_model=NavigationResponse,
    status_code=status.HTTP_200_OK,
    summary="Open a screen",
)
async def navigate(data: NavigationRequest, navigation: Navigation) -> NavigationResponse:
    navigation.navigate(parse_screen(data.screen))
    return _state(navigation)


@router.post("/back", response_model=NavigationResponse, summary="Go back one screen")
async def back(navigation: Navigation) -> NavigationResponse:
    navigation.back()
    return _state(navigation)


@router.post("/reset", response_model=NavigationResponse, summary="Reset the screen stack")
async def reset(data: NavigationRequest, navigation: Navigation) -> NavigationResponse:
    navigation.reset(parse_screen(data.screen))
    return _state(navigation)
