from __future__ import annotations

import logging
from typing import cast

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import ORJSONResponse

from app.config import AppSettings, configure_logging, load_settings
from app.paper_wiring import PaperContext, build_paper_context
from domain.models import DeleteRequest, DeviceProfile, PlacementRequest
from domain.placement import (
    Conflict,
    MessageDeleteForbiddenError,
    MessageNotFoundError,
    Placed,
    StorageUnavailableError,
)
from domain.ports.paper import MessageRepository
from domain.services.board_bounds import check_bounds

logger = logging.getLogger(__name__)

PLACEMENT_STATUS_CODES = {
    Placed: 201,
    Conflict: 409,
}


def create_app(settings: AppSettings, repository: MessageRepository | None = None) -> FastAPI:
    configure_logging(settings)
    app = FastAPI(title=settings.paper.title)
    app.state.context = build_paper_context(settings, repository)

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable(request: Request, exc: StorageUnavailableError) -> ORJSONResponse:
        logger.warning("Storage unavailable for %s %s: %s", request.method, request.url.path, exc)
        return ORJSONResponse({"status": "unavailable", "reason": str(exc)}, status_code=503)

    @app.get("/api/health")
    def health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.get("/api/paper")
    def my_paper(
        member_id: int | None = Header(default=None, alias="X-Member-Id"),
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        owner_id = require_member(member_id)
        messages = context.reader.owner_view(owner_id)
        return ORJSONResponse([message.to_dict() for message in messages])

    @app.post("/api/paper/delete")
    def delete_message(
        payload: DeleteRequest,
        member_id: int | None = Header(default=None, alias="X-Member-Id"),
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        owner_id = require_member(member_id)
        try:
            context.placement.delete_message(owner_id, payload.id)
        except MessageNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Message not found") from exc
        except MessageDeleteForbiddenError as exc:
            raise HTTPException(status_code=403, detail="Not your message") from exc
        return ORJSONResponse({"status": "deleted", "id": payload.id})

    @app.get("/api/paper/{owner_id}")
    def visit_paper(
        owner_id: int,
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        messages = context.reader.visit_view(owner_id)
        return ORJSONResponse([message.to_dict() for message in messages])

    @app.post("/api/paper/{owner_id}")
    def place_message(
        owner_id: int,
        payload: PlacementRequest,
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        result = context.placement.place(
            owner_id,
            payload.x,
            payload.y,
            payload.content,
            payload.anonymous_nickname,
            payload.deco_type,
        )
        status_code = PLACEMENT_STATUS_CODES.get(type(result), 422)
        return ORJSONResponse(result.to_dict(), status_code=status_code)

    @app.get("/api/paper/{owner_id}/suggestions")
    def suggest_slots(
        owner_id: int,
        x: int = Query(...),
        y: int = Query(...),
        limit: int | None = Query(default=None, ge=0),
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        out_of_bounds = check_bounds(x, y)
        if out_of_bounds is not None:
            return ORJSONResponse(out_of_bounds.to_dict(), status_code=422)
        suggestions = context.placement.suggest(owner_id, x, y, limit)
        return ORJSONResponse({"suggestions": [slot.to_dict() for slot in suggestions]})

    @app.get("/api/paper/{owner_id}/pages/{page}")
    def paper_page(
        owner_id: int,
        page: int,
        profile: DeviceProfile = Query(default=DeviceProfile.DESKTOP),
        context: PaperContext = Depends(get_context),
    ) -> ORJSONResponse:
        layout = context.reader.page_layout(owner_id, page, profile)
        if layout is None:
            raise HTTPException(status_code=404, detail="Page not found")
        return ORJSONResponse(layout.to_dict())

    return app


def get_context(request: Request) -> PaperContext:
    return cast(PaperContext, request.app.state.context)


def require_member(member_id: int | None) -> int:
    if member_id is None:
        raise HTTPException(status_code=401, detail="X-Member-Id header is required")
    return member_id


app = create_app(load_settings())
