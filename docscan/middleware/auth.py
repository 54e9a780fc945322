from fastapi import Request
from fastapi.responses import RedirectResponse
from docscan.auth.deps import get_token

# UI pages that need a session; the JSON API answers 401 on its own
PROTECTED_UI_PATHS = ["/ui/dashboard", "/ui/admin"]

async def ui_auth_middleware(request: Request, call_next):
    path = request.url.path

    if not any(path == p or path.startswith(p + "/") for p in PROTECTED_UI_PATHS):
        return await call_next(request)

    if not get_token(request):
        return RedirectResponse(url="/ui", status_code=307)

    return await call_next(request)
