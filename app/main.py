import uvicorn
import time

from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from core.auth import get_current_active_user
from core.config import PROJECT_NAME, API_V1_STR
from api.utils.logger import logger, myself, LEIF
from db.session import init_db

from api.v1.routes.users import users_router
from api.v1.routes.auth import auth_router
from api.v1.routes.projects import projects_router
from api.v1.routes.whitelist import whitelist_router
from api.v1.routes.applications import applications_router
from api.v1.routes.collaborations import collaborations_router
from api.v1.routes.activity import activity_router
from api.v1.routes.public import public_router

from config import Config, Environment
CFG = Config[Environment]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f' Begin {PROJECT_NAME}... ')
    init_db()
    yield
    logger.info('  Fin...  ')


app = FastAPI(
    title="Launchlist",
    docs_url=f"{API_V1_STR}/docs",
    openapi_url=API_V1_STR,
    lifespan=lifespan,
)

#region Routers
app.include_router(users_router,          prefix=f"{API_V1_STR}/users",    tags=["users"], dependencies=[Depends(get_current_active_user)])
app.include_router(auth_router,           prefix=f"{API_V1_STR}/auth",     tags=["auth"])
app.include_router(projects_router,       prefix=f"{API_V1_STR}/projects", tags=["projects"])
app.include_router(whitelist_router,      prefix=f"{API_V1_STR}/projects", tags=["whitelist"])
app.include_router(applications_router,   prefix=f"{API_V1_STR}/projects", tags=["applications"])
app.include_router(collaborations_router, prefix=f"{API_V1_STR}/projects", tags=["collabs"])
app.include_router(activity_router,       prefix=f"{API_V1_STR}/projects", tags=["activity"])
app.include_router(public_router,         prefix=f"{API_V1_STR}/p",        tags=["public"])
#endregion Routers

app.add_middleware(
    CORSMiddleware,
    allow_origins=CFG.corsOrigins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# all requests are timed and logged
@app.middleware("http")
async def add_logging_and_process_time(req: Request, call_next):
    try:
        beg = time.time()
        resNext = await call_next(req)
        tot = str(round((time.time() - beg) * 1000))
        resNext.headers["X-Process-Time-MS"] = tot
        logger.log(LEIF, f"""{req.method} {req.url}: {resNext.status_code} {tot}ms""".strip())
        if CFG.auditRequests:
            host = req.client.host if req.client else '-'
            logger.info(f'audit: {req.method} {req.url.path} from {host} -> {resNext.status_code} in {tot}ms')

        return resNext

    except Exception as e:
        logger.error(f'ERR:middleware:{myself()}: {e}')
        return JSONResponse(status_code=500, content={'status': 'error'})


@app.get(f"{API_V1_STR}/ping")
async def ping():
    return {"hello": "world"}

# MAIN
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", reload=True, port=8000)
