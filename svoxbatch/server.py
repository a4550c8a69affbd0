"""Static server for the SVOX playground so the batch driver has a local entry point."""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from svoxbatch.api.routes import router as api_router
from svoxbatch.core.config import Config, get_config
from svoxbatch.core.logging import console


def create_app(cfg: Optional[Config] = None) -> FastAPI:
    cfg = cfg or get_config()
    app = FastAPI(title="svox-batch")
    app.state.cfg = cfg
    app.include_router(api_router)
    if cfg.site_root.is_dir():
        app.mount("/site", StaticFiles(directory=str(cfg.site_root), html=True), name="site")
    else:
        console(f"site root {cfg.site_root} missing; /site not mounted")
    return app


def main() -> None:
    cfg = get_config()
    console(f"serving {cfg.site_root} at http://{cfg.server_host}:{cfg.server_port}/site/")
    uvicorn.run(create_app(cfg), host=cfg.server_host, port=cfg.server_port)


if __name__ == "__main__":
    main()
