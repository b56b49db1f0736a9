from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.schemas import SelectDateRequestSchema, SelectSlotRequestSchema, WidgetResponseSchema
from app.application.exceptions import WidgetActionError
from app.application.use_cases.booking_widget import BookingWidgetUseCase
from app.application.use_cases.render_view import ViewOptions, render_view
from app.domain.entities.widget_state import WidgetState
from app.wiring.dependencies import get_booking_widget_use_case, get_view_options

router = APIRouter()


def _response(session_id: str, state: WidgetState, options: ViewOptions) -> WidgetResponseSchema:
    return WidgetResponseSchema(session_id=session_id, view=render_view(state, options))


@router.post("/sessions", response_model=WidgetResponseSchema, status_code=201)
async def mount(
    request: Request,
    uc: BookingWidgetUseCase = Depends(get_booking_widget_use_case),
    options: ViewOptions = Depends(get_view_options),
):
    session_id, state = await uc.mount(dict(request.query_params))
    return _response(session_id, state, options)


@router.get("/sessions/{session_id}", response_model=WidgetResponseSchema)
async def get_session(
    session_id: str,
    uc: BookingWidgetUseCase = Depends(get_booking_widget_use_case),
    options: ViewOptions = Depends(get_view_options),
):
    try:
        state = uc.get_state(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Unknown session")
    return _response(session_id, state, options)


@router.post("/sessions/{session_id}/date", response_model=WidgetResponseSchema)
async def select_date(
    session_id: str,
    req: SelectDateRequestSchema,
    uc: BookingWidgetUseCase = Depends(get_booking_widget_use_case),
    options: ViewOptions = Depends(get_view_options),
):
    try:
        state = await uc.select_date(session_id, req.date)
    except KeyError:
        raise HTTPException(status_code=404, detail="Unknown session")
    except WidgetActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _response(session_id, state, options)


@router.post("/sessions/{session_id}/slot", response_model=WidgetResponseSchema)
async def select_slot(
    session_id: str,
    req: SelectSlotRequestSchema,
    uc: BookingWidgetUseCase = Depends(get_booking_widget_use_case),
    options: ViewOptions = Depends(get_view_options),
):
    try:
        state = uc.select_slot(session_id, req.start)
    except KeyError:
        raise HTTPException(status_code=404, detail="Unknown session")
    except WidgetActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _response(session_id, state, options)


@router.post("/sessions/{session_id}/confirm", response_model=WidgetResponseSchema)
async def confirm(
    session_id: str,
    uc: BookingWidgetUseCase = Depends(get_booking_widget_use_case),
    options: ViewOptions = Depends(get_view_options),
):
    try:
        state = await uc.submit(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Unknown session")
    except WidgetActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _response(session_id, state, options)
