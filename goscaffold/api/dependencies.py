from fastapi import HTTPException, Request

from goscaffold.service import ScaffoldService


def get_service(request: Request) -> ScaffoldService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(
            status_code=500, detail="Scaffold service not initialized on app.state."
        )
    return service
