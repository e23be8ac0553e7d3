from __future__ import annotations
from fastapi import APIRouter, Depends, Request, status
from ..contracts import UWFResponse, uwf_ok
from .contracts import LoginRequest, MeResponse, RegisterRequest
from .deps import get_auth_service, require_user

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/register", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, request: Request, svc = Depends(get_auth_service)):
    return uwf_ok(request, svc.register(req))

@router.post("/login", response_model=UWFResponse)
def login(req: LoginRequest, request: Request, svc = Depends(get_auth_service)):
    return uwf_ok(request, svc.login(req))

@router.get("/me", response_model=UWFResponse)
def me(request: Request, current_user = Depends(require_user)):
    return uwf_ok(request, MeResponse(user=current_user))
