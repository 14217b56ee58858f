from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    state = request.app.state.picker
    return {
        "status": "ok",
        "version": request.app.state.settings.version,
        "started": state.started,
        "rate_available": state.rates.rate is not None,
        "cached_images": state.images.cached_keys(),
    }
