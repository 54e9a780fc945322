
import os
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

WEB_DIR = os.path.dirname(__file__)
STATIC_DIR = os.path.join(WEB_DIR, "static")

templates = Jinja2Templates(directory=os.path.join(WEB_DIR, "templates"))
router = APIRouter(prefix="/ui", tags=["ui"])

@router.get("", response_class=HTMLResponse)
async def ui_home(request: Request):
    return templates.TemplateResponse(request, "login.html")

@router.get("/dashboard", response_class=HTMLResponse)
async def ui_dashboard(request: Request):
    return templates.TemplateResponse(request, "dashboard.html")

@router.get("/admin", response_class=HTMLResponse)
async def ui_admin(request: Request):
    return templates.TemplateResponse(request, "admin.html")
