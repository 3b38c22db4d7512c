from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Response, status

from tourbook.api.dependencies import get_current_user, get_use_cases
from tourbook.api.schemas.bookings import (
    ApiResponse,
    BookingView,
    CancelTripRequest,
    ConfirmPaymentRequest,
    CreateGuideBookingRequest,
    CreateTourBookingRequest,
    TripPage,
    UpdateBookingStatusRequest,
)
from tourbook.domain.entities.user import User

router = APIRouter()

CurrentUser = Annotated[User, Depends(get_current_user)]
UseCases = Annotated[dict, Depends(get_use_cases)]


@router.post(
    "/bookings",
    response_model=ApiResponse[BookingView],
    status_code=status.HTTP_201_CREATED,
)
async def create_tour_booking(
    payload: CreateTourBookingRequest,
    user: CurrentUser,
    use_cases: UseCases,
) -> ApiResponse[BookingView]:
    return await use_cases["create_tour_booking"].execute(request=payload, actor=user)


@router.post(
    "/bookings/guide",
    response_model=ApiResponse[BookingView],
    status_code=status.HTTP_201_CREATED,
)
async def create_guide_booking(
    payload: CreateGuideBookingRequest,
    user: CurrentUser,
    use_cases: UseCases,
) -> ApiResponse[BookingView]:
    return await use_cases["create_guide_booking"].execute(request=payload, actor=user)


@router.post(
    "/bookings/guide/guest",
    response_model=ApiResponse[BookingView],
    status_code=status.HTTP_201_CREATED,
)
async def create_guest_guide_booking(
    payload: CreateGuideBookingRequest,
    use_cases: UseCases,
) -> ApiResponse[BookingView]:
    """Reserva de guía sin sesión; provisiona una cuenta mínima por email."""
    return await use_cases["create_guide_booking"].execute_guest(request=payload)


@router.get("/bookings/user", response_model=ApiResponse[TripPage])
async def list_user_trips(
    user: CurrentUser,
    use_cases: UseCases,
    booking_status: str | None = Query(default=None, alias="status"),
    kind: str | None = Query(default=None, alias="type"),
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> ApiResponse[TripPage]:
    return await use_cases["list_user_trips"].execute(
        owner_id=user.id,
        status=booking_status,
        kind=kind,
        page=page,
        limit=limit,
    )


@router.get("/bookings/guide", response_model=ApiResponse[TripPage])
async def list_guide_bookings(
    user: CurrentUser,
    use_cases: UseCases,
    booking_status: str | None = Query(default=None, alias="status"),
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> ApiResponse[TripPage]:
    return await use_cases["list_guide_bookings"].execute(
        actor=user, status=booking_status, page=page, limit=limit
    )


@router.get("/bookings/{record_id}", response_model=ApiResponse[BookingView])
async def get_trip(record_id: str, user: CurrentUser, use_cases: UseCases) -> ApiResponse[BookingView]:
    return await use_cases["get_trip"].execute(record_id=record_id, actor=user)


@router.put("/bookings/{record_id}/cancel", response_model=ApiResponse[BookingView])
async def cancel_trip(
    record_id: str,
    user: CurrentUser,
    use_cases: UseCases,
    payload: CancelTripRequest | None = Body(default=None),
) -> ApiResponse[BookingView]:
    reason = payload.cancellation_reason if payload else None
    return await use_cases["cancel_trip"].execute(record_id=record_id, actor=user, reason=reason)


@router.put("/bookings/{record_id}/status", response_model=ApiResponse[BookingView])
async def update_booking_status(
    record_id: str,
    payload: UpdateBookingStatusRequest,
    user: CurrentUser,
    use_cases: UseCases,
) -> ApiResponse[BookingView]:
    return await use_cases["update_booking_status"].execute(
        record_id=record_id, request=payload, actor=user
    )


@router.post("/bookings/{record_id}/confirm-payment", response_model=ApiResponse[BookingView])
async def confirm_payment(
    record_id: str,
    user: CurrentUser,
    use_cases: UseCases,
    payload: ConfirmPaymentRequest | None = Body(default=None),
) -> ApiResponse[BookingView]:
    amount_paid = payload.amount_paid if payload else None
    return await use_cases["confirm_payment"].execute(
        record_id=record_id, actor=user, amount_paid=amount_paid
    )


@router.get(
    "/bookings/{record_id}/download-pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_invoice(record_id: str, user: CurrentUser, use_cases: UseCases) -> Response:
    document = await use_cases["download_invoice"].execute(record_id=record_id, actor=user)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.post("/bookings/{record_id}/send-confirmation-email", response_model=ApiResponse[dict])
async def send_confirmation_email(
    record_id: str, user: CurrentUser, use_cases: UseCases
) -> ApiResponse[dict]:
    return await use_cases["send_confirmation_email"].execute(record_id=record_id, actor=user)
