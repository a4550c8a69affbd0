from __future__ import annotations

from fastapi import APIRouter, Request

from svoxbatch import __version__

router = APIRouter()


@router.get("/healthz")
def healthz():
    return {"status": "ok"}


@router.get("/version")
def version(request: Request):
    cfg = request.app.state.cfg
    return {
        "service": "svox-batch",
        "version": __version__,
        "site_root": str(cfg.site_root),
        "site_available": cfg.site_root.is_dir(),
        "entry_url": cfg.entry_url,
    }
