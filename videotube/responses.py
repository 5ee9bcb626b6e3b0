from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "statusCode": status_code,
                "data": data,
                "message": message,
                "success": status_code < 400,
            }
        ),
    )


def api_error(status_code: int, message: str, errors: Optional[list] = None) -> JSONResponse:
    content = {"statusCode": status_code, "message": message, "success": False}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
