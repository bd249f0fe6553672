import logging
import os
import time
from datetime import datetime, timezone

import crud
import database
import errors
import registrar
import resolver
import schemas
import validators
from fastapi import Depends, FastAPI, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

ENVIRONMENT = database.ENVIRONMENT
VERSION = "1.0.0"
STARTED_AT = time.monotonic()

# --- Logging ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger("tinylink")

# --- DB tables ---
database.init_db()

app = FastAPI(
    title="TinyLink",
    description="Short links with click counting.",
    version=VERSION,
)

# --- CORS (allow frontend dev servers, etc.) ---
origins = ["*"] if ENVIRONMENT == "dev" else [
    os.getenv("PUBLIC_BASE_URL", "http://localhost:8000"),
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Errors ---
@app.exception_handler(errors.LinkError)
async def handle_link_error(request, exc: errors.LinkError):
    body = {"error": exc.error, "detail": exc.detail}
    if isinstance(exc, errors.StoreError):
        body["retryable"] = exc.retryable
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.error)
    return JSONResponse(status_code=exc.status_code, content=body)

@app.exception_handler(RequestValidationError)
async def handle_bad_request(request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "InvalidRequest", "detail": "Malformed request"},
    )

# Health check (useful for uptime monitors & load balancers)
@app.get("/healthz", response_model=schemas.HealthOut, include_in_schema=False)
def health():
    return {
        "ok": True,
        "version": VERSION,
        "uptime": time.monotonic() - STARTED_AT,
        "timestamp": datetime.now(timezone.utc),
    }

# ---------- API ----------
ERROR_RESPONSES = {
    400: {"model": schemas.ErrorOut},
    404: {"model": schemas.ErrorOut},
    409: {"model": schemas.ErrorOut},
    500: {"model": schemas.ErrorOut},
}

@app.post("/api/links", response_model=schemas.LinkOut, status_code=201, responses=ERROR_RESPONSES)
def create_link(link_in: schemas.LinkCreate, db=Depends(database.get_db)):
    logger.info("Creating link: code=%s target=%s", link_in.code, link_in.target_url)
    return registrar.create_link(db, link_in.target_url, link_in.code)

@app.get("/api/links", response_model=list[schemas.LinkOut])
def list_links(
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=1000),
    db=Depends(database.get_db),
):
    links = crud.get_links(db, skip=skip, limit=limit)
    logger.info("Listed %d links", len(links))
    return links

@app.get("/api/links/{code}", response_model=schemas.LinkOut, responses=ERROR_RESPONSES)
def get_link(code: str, db=Depends(database.get_db)):
    link = crud.get_link(db, code) if validators.is_valid_code(code) else None
    if not link:
        raise errors.LinkNotFound(code)
    return link

@app.delete("/api/links/{code}", response_model=schemas.DeletedLinkOut, responses=ERROR_RESPONSES)
def delete_link(code: str, db=Depends(database.get_db)):
    if not validators.is_valid_code(code):
        raise errors.LinkNotFound(code)
    deleted = crud.delete_link(db, code)
    logger.info("Deleted link %s", code)
    return {"message": "Link deleted successfully", "link": schemas.LinkOut.model_validate(deleted)}

# Registered last so the fixed routes above win
@app.get("/{code}", include_in_schema=False)
def redirect(code: str, db=Depends(database.get_db)):
    result = resolver.resolve(db, code)
    return RedirectResponse(url=result.target_url, status_code=302)

def run():
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))

if __name__ == "__main__":
    run()
