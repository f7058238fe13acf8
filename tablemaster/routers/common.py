"""Responses shared by the routers that write through the edit gate."""
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from tablemaster.models.change_request import ChangeRequest
from tablemaster.schemas.change_request import ChangeRequestResponse


def pending_response(req: ChangeRequest, message: str) -> JSONResponse:
    """202: the edit was captured as a change request and waits for an admin."""
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content=jsonable_encoder({
            "message": message,
            "change_request": ChangeRequestResponse.model_validate(req),
        }),
    )
