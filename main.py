# main.py

import os
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

from app.deps.errors import install_error_handlers
from app.routers import plan, portfolio


# ---------- Boot ----------

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("invest_planner")

# FastAPI app (create ONCE)
app = FastAPI(title="Invest Planner API")

# CORS: allow both localhost & 127.0.0.1 plus explicit APP_BASE_URL
_default_webs = ["http://127.0.0.1:3000", "http://localhost:3000", "http://localhost:5173"]
_app_base = os.getenv("APP_BASE_URL")
allow_origins = _default_webs if not _app_base else sorted(set(_default_webs + [_app_base]))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(plan.router)
app.include_router(portfolio.router)


# ---------- Health ----------
@app.get("/")
def root():
    return {"ok": True, "service": "invest-planner-api", "cors": allow_origins}

@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "3001"))
    logger.info(f"Server running on http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
