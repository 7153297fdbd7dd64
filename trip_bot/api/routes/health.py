from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
async def health(request: Request):
    store = request.app.state.session_store
    return {"status": "ok", "message": "Trip Bot Running", "active_sessions": len(store)}
