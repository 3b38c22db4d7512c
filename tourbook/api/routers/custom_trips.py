from typing import Annotated

from fastapi import APIRouter, Depends, status

from tourbook.api.dependencies import get_current_user, get_use_cases
from tourbook.api.schemas.bookings import ApiResponse, BookingView
from tourbook.domain.entities.user import User

router = APIRouter()


@router.post(
    "/custom-trips/{trip_id}/booking",
    response_model=ApiResponse[BookingView],
    status_code=status.HTTP_201_CREATED,
)
async def create_shadow_booking(
    trip_id: str,
    user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> ApiResponse[BookingView]:
    """Staff/admin fija los términos comerciales del custom trip."""
    return await use_cases["create_shadow_booking"].execute(trip_id=trip_id, actor=user)
